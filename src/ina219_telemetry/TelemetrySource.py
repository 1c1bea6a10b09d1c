"""Protocol for telemetry data sources."""
from typing import Protocol, runtime_checkable, Any


@runtime_checkable
class TelemetrySource(Protocol):
    """Protocol for telemetry data sources.

    All telemetry sources must implement:
    - update() to take a fresh reading from the sensor
    - get_state() to return the last reading

    Structural typing: any class implementing these methods satisfies the
    protocol without inheriting from it.
    """

    def update(self) -> None:
        """Take a fresh reading and store it.

        Raises:
            INAError: Transport or calibration errors from the sensor.
        """
        ...

    def get_state(self) -> Any:
        """Return the last reading as a dataclass."""
        ...
