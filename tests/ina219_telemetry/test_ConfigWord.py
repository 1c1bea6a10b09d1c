"""Tests for CONFIG register packing."""
import itertools
import unittest

from ina219_helper import ConfigurationRangeError
from ina219_telemetry.ConfigWord import ConfigWord
from ina219_telemetry.Registers import ADCResolution, BusVoltageRange, Gain, Mode


class TestConfigWord(unittest.TestCase):
    def test_pack_32v_2a_configuration(self):
        word = ConfigWord(
            bus_voltage_range=BusVoltageRange.RANGE_32V,
            gain=Gain.DIV_8_320MV,
            bus_adc_resolution=ADCResolution.ADCRES_12BIT_32S,
            shunt_adc_resolution=ADCResolution.ADCRES_12BIT_32S,
            mode=Mode.SANDBVOLT_CONTINUOUS,
        )

        # 1<<13 | 3<<11 | 13<<7 | 13<<3 | 7
        assert word.pack() == 0x3EEF

    def test_pack_all_zero(self):
        assert ConfigWord(0, 0, 0, 0, 0).pack() == 0

    def test_unpack_recovers_fields(self):
        for values in itertools.product(
            range(2), range(4), (0, 3, 9, 15), (0, 1, 13, 15), range(8)
        ):
            word = ConfigWord(*values)
            unpacked = ConfigWord.unpack(word.pack())

            assert unpacked == word

    def test_distinct_fields_give_distinct_words(self):
        words = {
            ConfigWord(*values).pack()
            for values in itertools.product(range(2), range(4), range(16), range(16), range(8))
        }

        assert len(words) == 2 * 4 * 16 * 16 * 8

    def test_out_of_range_fields_raise(self):
        with self.assertRaises(ConfigurationRangeError):
            ConfigWord(2, 0, 0, 0, 0)
        with self.assertRaises(ConfigurationRangeError):
            ConfigWord(0, 4, 0, 0, 0)
        with self.assertRaises(ConfigurationRangeError):
            ConfigWord(0, 0, 16, 0, 0)
        with self.assertRaises(ConfigurationRangeError):
            ConfigWord(0, 0, 0, 16, 0)
        with self.assertRaises(ConfigurationRangeError) as ctx:
            ConfigWord(0, 0, 0, 0, 8)

        assert ctx.exception.field == "mode"
        assert ctx.exception.width == 3

    def test_negative_field_raises(self):
        with self.assertRaises(ConfigurationRangeError):
            ConfigWord(0, -1, 0, 0, 0)


if __name__ == '__main__':
    unittest.main()
