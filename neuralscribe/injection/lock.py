"""Serialization lock for paste dispatches."""

import logging
import threading
import time

from neuralscribe.config import PASTE_DEBOUNCE_SECONDS, PASTE_DUPLICATE_WINDOW_SECONDS

logger = logging.getLogger("neuralscribe")


class PasteLock:
    """Admits one paste at a time and drops rapid or repeated triggers.

    A caller gets the lock only if no paste is in flight, at least
    ``debounce`` seconds passed since the last admitted paste, and the text
    is not the same as the last admitted text within ``duplicate_window``.
    Rejected callers are not queued.
    """

    def __init__(
        self,
        debounce: float = PASTE_DEBOUNCE_SECONDS,
        duplicate_window: float = PASTE_DUPLICATE_WINDOW_SECONDS,
        clock=time.monotonic,
    ):
        self.debounce = debounce
        self.duplicate_window = duplicate_window
        self._clock = clock
        self._guard = threading.Lock()
        self._busy = False
        self._last_acquired_at: float | None = None
        self._last_text: str | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    def try_acquire(self, text: str) -> bool:
        with self._guard:
            if self._busy:
                logger.debug("Paste lock busy")
                return False

            now = self._clock()
            if self._last_acquired_at is not None:
                elapsed = now - self._last_acquired_at
                if elapsed < self.debounce:
                    logger.debug("Paste debounced (%.2fs since last)", elapsed)
                    return False
                if text == self._last_text and elapsed < self.duplicate_window:
                    logger.debug("Duplicate paste dropped (%.2fs since last)", elapsed)
                    return False

            self._busy = True
            self._last_acquired_at = now
            self._last_text = text
            return True

    def release(self) -> None:
        with self._guard:
            self._busy = False
