from dataclasses import dataclass

from ina219_telemetry.ConfigWord import ConfigWord
from ina219_telemetry.Registers import (
    ADCResolution,
    BusVoltageRange,
    Gain,
    Mode,
    POWER_LSB_RATIO,
)

# From datasheet: CAL = trunc(0.04096 / (current_LSB * R_shunt))
CALIBRATION_SCALE = 0.04096

# Largest positive CURRENT register value
CURRENT_REGISTER_MAX = 0x7FFF

# Full scale shunt range at gain /8
MAX_SHUNT_RANGE_MV = 320


@dataclass(frozen=True)
class CalibrationProfile:
    """
    Calibration register value and the scale factors derived from it.

    - current_lsb: mA per bit of the CURRENT register
    - power_lsb: W per bit of the POWER register, 20x current_lsb taken as mW
    """
    calibration_value: int
    current_lsb: float
    power_lsb: float
    bus_voltage_range: BusVoltageRange = BusVoltageRange.RANGE_32V
    gain: Gain = Gain.DIV_8_320MV


def compute_profile(
    target_range_volts: float = 32,
    target_max_amps: float = 2.0,
    shunt_resistance_ohms: float = 0.1,
    current_lsb: float = 0.1
) -> CalibrationProfile:
    """
    Build a calibration profile.

    Defaults give the 32V/2A profile for a 0.1 Ω shunt: calibration 4096,
    0.1 mA/bit current and 2 mW/bit power. Counter overflow occurs at 3.2A.
    current_lsb is given in mA per bit. Raises ValueError when target_max_amps
    does not fit the current register at that resolution or its shunt drop
    exceeds the widest shunt range.
    """
    if shunt_resistance_ohms <= 0:
        raise ValueError("Shunt resistance must be positive")
    if current_lsb <= 0:
        raise ValueError("Current LSB must be positive")

    max_current_ma = CURRENT_REGISTER_MAX * current_lsb
    if target_max_amps * 1000 > max_current_ma:
        raise ValueError(
            f"{target_max_amps} A exceeds {max_current_ma / 1000:.4f} A representable "
            f"with {current_lsb} mA/bit"
        )

    shunt_drop_mv = round(target_max_amps * shunt_resistance_ohms * 1000, 6)
    if shunt_drop_mv > MAX_SHUNT_RANGE_MV:
        raise ValueError(
            f"Shunt drop of {shunt_drop_mv:.1f} mV exceeds the {MAX_SHUNT_RANGE_MV} mV shunt range"
        )

    current_lsb_a = current_lsb / 1000
    # Round away float noise (4095.9999...) before truncating
    calibration = int(round(CALIBRATION_SCALE / (current_lsb_a * shunt_resistance_ohms), 6))
    if calibration > 0xFFFF:
        raise ValueError(f"Calibration value out of range: {calibration}")

    if target_range_volts > 16:
        bus_range = BusVoltageRange.RANGE_32V
    else:
        bus_range = BusVoltageRange.RANGE_16V

    # Smallest gain whose shunt range covers the expected drop
    gain = Gain.DIV_8_320MV
    for candidate, range_mv in (
        (Gain.DIV_1_40MV, 40),
        (Gain.DIV_2_80MV, 80),
        (Gain.DIV_4_160MV, 160),
    ):
        if shunt_drop_mv <= range_mv:
            gain = candidate
            break

    # mW per bit expressed as W
    power_lsb = POWER_LSB_RATIO * current_lsb / 1000

    return CalibrationProfile(
        calibration_value=calibration,
        current_lsb=current_lsb,
        power_lsb=power_lsb,
        bus_voltage_range=bus_range,
        gain=gain,
    )


CALIBRATION_32V_2A = CalibrationProfile(
    calibration_value=4096,
    current_lsb=0.1,
    power_lsb=0.002,
)


def build_config_word(profile: CalibrationProfile) -> ConfigWord:
    """12 bit, 32 sample averaging on both ADCs, continuous shunt and bus sampling."""
    return ConfigWord(
        bus_voltage_range=profile.bus_voltage_range,
        gain=profile.gain,
        bus_adc_resolution=ADCResolution.ADCRES_12BIT_32S,
        shunt_adc_resolution=ADCResolution.ADCRES_12BIT_32S,
        mode=Mode.SANDBVOLT_CONTINUOUS,
    )
