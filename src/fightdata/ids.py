"""Fight identifiers."""

import threading
import time


class IdGenerator:
    """Thread-safe ``fight_<timestamp>_<counter>`` ids.

    The timestamp is taken once, when the generator is built, so ids are
    unique only within one instance. Two generators created within the same
    clock tick produce the same prefixes and collide on equal counters.
    """

    def __init__(self) -> None:
        self._timestamp = time.time_ns()
        self._counter = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"fight_{self._timestamp}_{self._counter}"
