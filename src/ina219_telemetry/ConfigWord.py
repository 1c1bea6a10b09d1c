from dataclasses import dataclass

from ina219_helper import ConfigurationRangeError


@dataclass(frozen=True)
class ConfigWord:
    """
    Contents of the CONFIG register.

    Layout (MSB to LSB):
    - bit 13: bus voltage range
    - bits 11-12: gain
    - bits 7-10: bus ADC resolution
    - bits 3-6: shunt ADC resolution
    - bits 0-2: mode

    Each field is checked against its width when the word is created, values
    that do not fit raise ConfigurationRangeError.
    """
    bus_voltage_range: int
    gain: int
    bus_adc_resolution: int
    shunt_adc_resolution: int
    mode: int

    # field name -> (shift, width)
    FIELDS = {
        "bus_voltage_range": (13, 1),
        "gain": (11, 2),
        "bus_adc_resolution": (7, 4),
        "shunt_adc_resolution": (3, 4),
        "mode": (0, 3),
    }

    def __post_init__(self) -> None:
        for name, (_, width) in self.FIELDS.items():
            value = int(getattr(self, name))
            if value < 0 or value >= (1 << width):
                raise ConfigurationRangeError(name, value, width)

    def pack(self) -> int:
        word = 0
        for name, (shift, _) in self.FIELDS.items():
            word |= int(getattr(self, name)) << shift

        return word

    @classmethod
    def unpack(cls, raw: int) -> 'ConfigWord':
        values = {
            name: (raw >> shift) & ((1 << width) - 1)
            for name, (shift, width) in cls.FIELDS.items()
        }

        return cls(**values)
