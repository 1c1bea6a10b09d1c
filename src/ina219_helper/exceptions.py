class INAError(Exception):
    pass


class TransportError(INAError):
    """Raised when a bus transfer fails or returns a malformed length."""
    pass


class NotCalibratedError(INAError):
    """Raised when a measurement is requested before initialize() completed."""
    pass


class ConfigurationRangeError(INAError):
    def __init__(self, field: str, value: int, width: int):
        self.field = field
        self.value = value
        self.width = width
        super().__init__(
            f"Value {value} for '{field}' does not fit into {width} bit(s)"
        )
