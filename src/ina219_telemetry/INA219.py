import logging
import threading
from typing import Any, Optional, Tuple

from ina219_helper import INAError, NotCalibratedError
from ina219_telemetry.Calibration import (
    CALIBRATION_32V_2A,
    CalibrationProfile,
    build_config_word,
)
from ina219_telemetry.Registers import (
    INARegister,
    BUS_VOLTAGE_LSB_V,
    BUS_VOLTAGE_STATUS_BITS,
    SHUNT_VOLTAGE_LSB_MV,
)
from ina219_telemetry.Transport import Transport


def to_signed(raw: int) -> int:
    """Interpret a 16 bit register value as two's complement."""
    if raw > 0x7FFF:
        return raw - 0x10000

    return raw


class INA219:
    """
    INA219 current/power monitor.

    Default address is 0x42. Can be verified with:
    > sudo i2cdetect -y 1

    The chip clears the calibration register as a side effect of some reads,
    so calibration is written again before every shunt voltage, bus voltage
    and power read. Current reads do not need this.

    All accessors raise NotCalibratedError until initialize() succeeded and
    TransportError when a bus transfer fails. Nothing is retried.
    """

    def __init__(
        self,
        address: int = 0x42,
        bus: Any = 1,
        profile: CalibrationProfile = CALIBRATION_32V_2A,
        auto_initialize: bool = True
    ) -> None:
        self.address = address
        self.profile = profile
        self._transport = Transport(address, bus)
        self._calibrated = False
        self._lock = threading.Lock()

        if auto_initialize:
            try:
                self.initialize()
            except INAError:
                self._transport.close()
                raise

    @property
    def calibrated(self) -> bool:
        return self._calibrated

    def initialize(self, profile: Optional[CalibrationProfile] = None) -> None:
        """Write CALIBRATION, then CONFIG. A given profile replaces the current one."""
        with self._lock:
            self._calibrated = False
            if profile is not None:
                self.profile = profile

            calibration = self.profile.calibration_value
            config = build_config_word(self.profile).pack()
            self._transport.write_register(INARegister.CALIBRATION, calibration)
            self._transport.write_register(INARegister.CONFIG, config)

            self._calibrated = True

        logging.debug(
            "INA219 at 0x%02X calibrated (cal=%d, config=0x%04X)",
            self.address, calibration, config
        )

    def set_profile(self, profile: CalibrationProfile) -> None:
        """Replace the calibration profile and re-initialize the chip."""
        self.initialize(profile)

    def _read(
        self, register: INARegister, recalibrate: bool
    ) -> Tuple[int, CalibrationProfile]:
        """Return the raw value together with the profile it was read under."""
        with self._lock:
            if not self._calibrated:
                raise NotCalibratedError(
                    f"INA219 at 0x{self.address:02X} is not initialized"
                )

            if recalibrate:
                self._transport.write_register(
                    INARegister.CALIBRATION, self.profile.calibration_value
                )

            return self._transport.read_register(register), self.profile

    def get_shunt_voltage_mv(self) -> float:
        raw, _ = self._read(INARegister.SHUNT_VOLTAGE, recalibrate=True)

        return to_signed(raw) * SHUNT_VOLTAGE_LSB_MV

    def get_bus_voltage_v(self) -> float:
        # Low bits are status flags (CNVR, OVF)
        raw, _ = self._read(INARegister.BUS_VOLTAGE, recalibrate=True)

        return (raw >> BUS_VOLTAGE_STATUS_BITS) * BUS_VOLTAGE_LSB_V

    def get_current_ma(self) -> float:
        raw, profile = self._read(INARegister.CURRENT, recalibrate=False)

        return to_signed(raw) * profile.current_lsb

    def get_power_w(self) -> float:
        raw, profile = self._read(INARegister.POWER, recalibrate=True)

        return to_signed(raw) * profile.power_lsb

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> 'INA219':
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
