from ina219_helper.helper import clamp
from ina219_helper.exceptions import (
  INAError,
  TransportError,
  NotCalibratedError,
  ConfigurationRangeError,
)

__all__ = [
  "clamp",
  "INAError",
  "TransportError",
  "NotCalibratedError",
  "ConfigurationRangeError",
]
