"""
Polls a telemetry source in the background.

Errors from the sensor are logged and the last good reading is kept, the next
cycle simply tries again. The public interface is poll(), get_state() and
get_failures(). poll() can also be driven from a foreground loop.
"""
import copy
import logging
import threading
import time
from typing import Any, Optional

from ina219_helper import INAError
from ina219_telemetry.TelemetrySource import TelemetrySource


class Monitor(threading.Thread):
    def __init__(self, source: TelemetrySource, interval: float = 5.0) -> None:
        super().__init__(daemon=True)

        self._source = source
        self.interval = interval

        self._state: Optional[Any] = None
        self._failures = 0

        self._running = threading.Event()
        self._lock = threading.Lock()

    def poll(self) -> bool:
        """Run one cycle, returns False when the sensor could not be read."""
        try:
            self._source.update()
        except INAError as e:
            with self._lock:
                self._failures += 1
            logging.warning("Could not read required values: %s", e)
            return False

        with self._lock:
            self._state = copy.deepcopy(self._source.get_state())
            self._failures = 0

        return True

    def run(self) -> None:
        self._running.set()
        while self._running.is_set():
            self.poll()

            time.sleep(self.interval)

    def get_state(self) -> Optional[Any]:
        with self._lock:
            return copy.deepcopy(self._state)

    def get_failures(self) -> int:
        """Consecutive failed cycles since the last good reading."""
        with self._lock:
            return self._failures

    def stop(self) -> None:
        self._running.clear()
