from .Registers import (
    INARegister,
    BusVoltageRange,
    Gain,
    ADCResolution,
    Mode,
)
from .ConfigWord import ConfigWord
from .Transport import Transport
from .Calibration import (
    CalibrationProfile,
    CALIBRATION_32V_2A,
    compute_profile,
    build_config_word,
)
from .INA219 import INA219, to_signed
from .PowerTelemetry import PowerTelemetry, PowerState, charge_percentage
from .TelemetrySource import TelemetrySource
from .Monitor import Monitor
from .Settings import Settings

__all__ = [
  'INARegister',
  'BusVoltageRange',
  'Gain',
  'ADCResolution',
  'Mode',
  'ConfigWord',
  'Transport',
  'CalibrationProfile',
  'CALIBRATION_32V_2A',
  'compute_profile',
  'build_config_word',
  'INA219',
  'to_signed',
  'PowerTelemetry',
  'PowerState',
  'charge_percentage',
  'TelemetrySource',
  'Monitor',
  'Settings',
]
