"""
Print INA219 readings every few seconds.

Settings are read from a TOML file (--config), command line options override
them. CTRL-C will exit cleanly.
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

from ina219_helper import INAError
from ina219_telemetry import INA219, Monitor, PowerTelemetry, PowerState, Settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Read INA219 power telemetry.")
    parser.add_argument("--config", type=str, default="ina219.toml",
                        help="Path to settings file (default: ina219.toml)")
    parser.add_argument("--bus", type=int, default=None,
                        help="I2C bus number (default: from settings, 1)")
    parser.add_argument("--address", type=lambda value: int(value, 0), default=None,
                        help="I2C address, e.g. 0x42 (default: from settings, 0x42)")
    parser.add_argument("--interval", type=float, default=None,
                        help="Seconds between readings (default: from settings, 5)")
    parser.add_argument("--count", type=int, default=0,
                        help="Number of readings, 0 runs forever (default: 0)")
    parser.add_argument("--log", default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). (default: from settings, INFO)")

    return parser.parse_args(argv)


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )


def format_state(state: PowerState) -> str:
    return "\n".join([
        f"PSU Voltage:   {state.psu_voltage:.3f} V",
        f"Load Voltage:  {state.load_voltage:.3f} V",
        f"Current:       {state.current:.6f} A",
        f"Power:         {state.power:.3f} W",
        f"Percentage:    {state.percentage:.1f} %",
        f"Shunt Voltage: {state.shunt_voltage:.6f} V",
    ])


def run(monitor: Monitor, count: int = 0) -> int:
    """Poll until count readings were attempted, returns the number of failures."""
    failures = 0
    attempts = 0
    while count == 0 or attempts < count:
        attempts += 1
        if monitor.poll():
            print(format_state(monitor.get_state()), flush=True)
        else:
            failures += 1

        if count == 0 or attempts < count:
            time.sleep(monitor.interval)

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings(args.config)

    sensor_settings = settings.get("sensor")
    battery_settings = settings.get("battery")
    monitor_settings = settings.get("monitor")

    configure_logging(args.log or settings.get("log"))

    bus = args.bus if args.bus is not None else sensor_settings["bus"]
    address = args.address if args.address is not None else sensor_settings["address"]
    interval = args.interval if args.interval is not None else monitor_settings["interval"]

    try:
        sensor = INA219(address, bus)
    except INAError as e:
        logging.error("Failed to initialize INA219 at 0x%02X: %s", address, e)
        return 1

    try:
        telemetry = PowerTelemetry(
            sensor,
            battery_settings["empty_voltage"],
            battery_settings["full_voltage"]
        )
    except ValueError as e:
        logging.error("Invalid battery settings: %s", e)
        sensor.close()
        return 1

    monitor = Monitor(telemetry, interval)

    try:
        with sensor:
            failures = run(monitor, args.count)
    except KeyboardInterrupt:
        return 0

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
