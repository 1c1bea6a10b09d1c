from dataclasses import dataclass

from ina219_helper import clamp
from ina219_telemetry.INA219 import INA219


def charge_percentage(
    voltage: float,
    empty_voltage: float = 6.0,
    full_voltage: float = 8.4
) -> float:
    """Linear charge estimate between empty and full voltage, clamped to 0-100."""
    if empty_voltage == full_voltage:
        raise ValueError("Voltage range cannot be zero")

    percentage = (voltage - empty_voltage) / (full_voltage - empty_voltage) * 100

    return clamp(percentage, 0, 100)


@dataclass
class PowerState:
    """Power telemetry state."""
    psu_voltage: float = 0.0
    load_voltage: float = 0.0
    shunt_voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    percentage: float = 0.0


class PowerTelemetry:
    """
    Reads all four quantities from an INA219 and converts them to SI units.

    The sensor measures bus voltage on the load side, so the supply voltage is
    the bus voltage plus the drop across the shunt.
    """

    def __init__(
        self,
        sensor: INA219,
        empty_voltage: float = 6.0,
        full_voltage: float = 8.4
    ) -> None:
        if empty_voltage == full_voltage:
            raise ValueError("Voltage range cannot be zero")

        self._sensor = sensor
        self.empty_voltage = empty_voltage
        self.full_voltage = full_voltage

        self._state = PowerState()

    def update(self) -> None:
        """Update power telemetry from INA sensor."""
        load_voltage = self._sensor.get_bus_voltage_v()
        shunt_voltage = self._sensor.get_shunt_voltage_mv() / 1000
        current = self._sensor.get_current_ma() / 1000
        power = self._sensor.get_power_w()

        self._state = PowerState(
            psu_voltage=load_voltage + shunt_voltage,
            load_voltage=load_voltage,
            shunt_voltage=shunt_voltage,
            current=current,
            power=power,
            percentage=charge_percentage(
                load_voltage, self.empty_voltage, self.full_voltage
            ),
        )

    def get_state(self) -> PowerState:
        return self._state
