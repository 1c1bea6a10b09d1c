from enum import IntEnum


class INARegister(IntEnum):
    CONFIG = 0x00
    SHUNT_VOLTAGE = 0x01
    BUS_VOLTAGE = 0x02
    POWER = 0x03
    CURRENT = 0x04
    CALIBRATION = 0x05


class BusVoltageRange(IntEnum):
    RANGE_16V = 0x00
    RANGE_32V = 0x01


class Gain(IntEnum):
    """Shunt PGA gain and the resulting full scale shunt range."""
    DIV_1_40MV = 0x00
    DIV_2_80MV = 0x01
    DIV_4_160MV = 0x02
    DIV_8_320MV = 0x03


class ADCResolution(IntEnum):
    """Bus/shunt ADC resolution and averaging, with conversion time."""
    ADCRES_9BIT_1S = 0x00     # 84us
    ADCRES_10BIT_1S = 0x01    # 148us
    ADCRES_11BIT_1S = 0x02    # 276us
    ADCRES_12BIT_1S = 0x03    # 532us
    ADCRES_12BIT_2S = 0x09    # 1.06ms
    ADCRES_12BIT_4S = 0x0A    # 2.13ms
    ADCRES_12BIT_8S = 0x0B    # 4.26ms
    ADCRES_12BIT_16S = 0x0C   # 8.51ms
    ADCRES_12BIT_32S = 0x0D   # 17.02ms
    ADCRES_12BIT_64S = 0x0E   # 34.05ms
    ADCRES_12BIT_128S = 0x0F  # 68.10ms


class Mode(IntEnum):
    POWER_DOWN = 0x00
    SVOLT_TRIGGERED = 0x01
    BVOLT_TRIGGERED = 0x02
    SANDBVOLT_TRIGGERED = 0x03
    ADC_OFF = 0x04
    SVOLT_CONTINUOUS = 0x05
    BVOLT_CONTINUOUS = 0x06
    SANDBVOLT_CONTINUOUS = 0x07


# mV per bit, fixed by the chip
SHUNT_VOLTAGE_LSB_MV = 0.01

# V per bit, after dropping the three status bits
BUS_VOLTAGE_LSB_V = 0.004
BUS_VOLTAGE_STATUS_BITS = 3

# Power register scale is fixed at 20x the current scale
POWER_LSB_RATIO = 20
