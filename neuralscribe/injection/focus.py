"""Frontmost-application tracking.

Sampling the frontmost process on an interval is how we know which terminal
the user touched last. Without samples, ranking falls back to catalog order.
"""

import logging
import threading
import time

from neuralscribe.config import SELF_APP_ID, SELF_APP_NAME, get_focus_sample_interval
from neuralscribe.injection.detection import comm_name, get_catalog, get_frontmost_app
from neuralscribe.models import FrontmostApp, TerminalApp

logger = logging.getLogger("neuralscribe")


def match_terminal(front: FrontmostApp, catalog: list[TerminalApp]) -> TerminalApp | None:
    for app in catalog:
        if front.app_id and front.app_id == app.app_id:
            return app
        if front.name.lower() in (app.process_name.lower(), comm_name(app.process_name).lower()):
            return app
    return None


class FocusTracker:
    def __init__(self, interval: float | None = None, frontmost=get_frontmost_app,
                 catalog: list[TerminalApp] | None = None, clock=time.monotonic):
        self.interval = interval if interval is not None else get_focus_sample_interval()
        self._frontmost = frontmost
        self._catalog = catalog
        self._clock = clock
        self._lock = threading.Lock()
        self._last_seen: dict[str, float] = {}
        self._captured: FrontmostApp | None = None
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    def sample(self) -> TerminalApp | None:
        """Record the frontmost app if it is a known terminal."""
        front = self._frontmost()
        if front is None:
            return None
        catalog = self._catalog if self._catalog is not None else get_catalog()
        app = match_terminal(front, catalog)
        if app is not None:
            with self._lock:
                self._last_seen[app.app_id] = self._clock()
        return app

    def last_seen(self, app_id: str) -> float | None:
        with self._lock:
            return self._last_seen.get(app_id)

    def most_recent(self) -> str | None:
        """App id of the terminal that was frontmost most recently, if any was seen."""
        with self._lock:
            if not self._last_seen:
                return None
            return max(self._last_seen, key=self._last_seen.get)

    def rank(self, apps: list[TerminalApp]) -> list[TerminalApp]:
        """Order apps most recently frontmost first; never-seen apps keep their order at the end."""
        with self._lock:
            seen = dict(self._last_seen)
        recent = sorted((a for a in apps if a.app_id in seen), key=lambda a: seen[a.app_id], reverse=True)
        return recent + [a for a in apps if a.app_id not in seen]

    def _run(self):
        while not self._stop_event.is_set():
            try:
                self.sample()
            except Exception as e:
                logger.debug("Focus sample failed: %s", e)
            self._stop_event.wait(self.interval)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="focus-tracker", daemon=True)
        self._thread.start()
        logger.debug("Focus tracker started (every %.1fs)", self.interval)

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=self.interval + 1.0)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def capture(self) -> FrontmostApp | None:
        """Remember the app that is frontmost now, before our own UI takes focus."""
        front = self._frontmost()
        if front and (front.app_id == SELF_APP_ID or front.name == SELF_APP_NAME):
            logger.debug("Frontmost app is Neural Scribe itself, not capturing")
            front = None
        with self._lock:
            self._captured = front
        if front:
            logger.info("🎯 Captured frontmost app: %s", front.name)
        return front

    @property
    def captured(self) -> FrontmostApp | None:
        with self._lock:
            return self._captured

    def clear_captured(self) -> None:
        with self._lock:
            self._captured = None
