import logging
import threading
from typing import Any

from smbus3 import SMBus

from ina219_helper import TransportError
from ina219_telemetry.Registers import INARegister

REGISTER_SIZE = 2


class Transport:
    """
    Register level access to a single device on an I2C bus.

    Every register is 16 bit wide and transferred as two bytes, most
    significant byte first, independent of host byte order.

    Pass either a bus number (the bus is opened and owned by this object) or an
    already opened bus object providing read_i2c_block_data and
    write_i2c_block_data (shared buses, test doubles). Shared bus objects are
    not closed by close().
    """

    def __init__(self, address: int, bus: Any = 1) -> None:
        self.address = address

        self._owns_bus = isinstance(bus, int)
        if self._owns_bus:
            try:
                self.bus = SMBus(bus)
            except OSError as e:
                raise TransportError(f"Could not open I2C bus {bus}: {e}") from e
        else:
            self.bus = bus

        self._closed = False
        self._lock = threading.Lock()

    def read_register(self, register: INARegister) -> int:
        with self._lock:
            self._check_open()
            try:
                data = self.bus.read_i2c_block_data(
                    self.address, register, REGISTER_SIZE
                )
            except OSError as e:
                raise TransportError(
                    f"Reading register 0x{register:02X} from 0x{self.address:02X} failed: {e}"
                ) from e

        if data is None or len(data) < REGISTER_SIZE:
            raise TransportError(
                f"Short read from register 0x{register:02X}: {data!r}"
            )

        value = ((data[0] & 0xFF) << 8) | (data[1] & 0xFF)
        logging.debug("Read 0x%04X from register 0x%02X", value, register)

        return value

    def write_register(self, register: INARegister, value: int) -> None:
        if value < 0 or value > 0xFFFF:
            raise ValueError(f"Register value out of range: {value}")

        data = [(value >> 8) & 0xFF, value & 0xFF]
        with self._lock:
            self._check_open()
            try:
                self.bus.write_i2c_block_data(self.address, register, data)
            except OSError as e:
                raise TransportError(
                    f"Writing register 0x{register:02X} on 0x{self.address:02X} failed: {e}"
                ) from e

        logging.debug("Wrote 0x%04X to register 0x%02X", value, register)

    def _check_open(self) -> None:
        if self._closed:
            raise TransportError(f"Bus for 0x{self.address:02X} is closed")

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return

            self._closed = True
            if self._owns_bus:
                self.bus.close()
                self.bus = None
