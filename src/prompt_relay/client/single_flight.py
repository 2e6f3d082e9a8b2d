"""
Single-slot guard allowing one outstanding call at a time.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from prompt_relay.core.exceptions import RequestInFlightError


class SingleFlightGuard:
    """A non-blocking, single-slot lock.

    ``try_acquire`` never waits: it either takes the slot or reports that it
    is busy. Callers that hold the slot must ``release`` it on every exit
    path; ``hold`` does that for them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        """Free the slot.

        Raises:
            RuntimeError: If the slot is not held
        """
        self._lock.release()

    @property
    def is_held(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Hold the slot for the duration of the block.

        Raises:
            RequestInFlightError: If another call already holds the slot
        """
        if not self.try_acquire():
            raise RequestInFlightError()
        try:
            yield
        finally:
            self.release()
