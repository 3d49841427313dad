"""Terminal automation service for Neural Scribe.

One process-wide service owns the dispatcher, so every caller (CLI, MCP
tools, the paste pipeline) goes through the same paste lock.
"""

import logging
import threading

from neuralscribe.injection import detection
from neuralscribe.injection.focus import FocusTracker
from neuralscribe.injection.inject import Dispatcher
from neuralscribe.models import FrontmostApp, PasteResult, TerminalApp, TerminalWindow

logger = logging.getLogger("neuralscribe")


class TerminalService:
    def __init__(self, dispatcher: Dispatcher | None = None, focus_tracker: FocusTracker | None = None):
        self.focus_tracker = focus_tracker or FocusTracker()
        self.dispatcher = dispatcher or Dispatcher(focus_tracker=self.focus_tracker)

    def list_running_terminal_apps(self) -> list[TerminalApp]:
        return self.dispatcher.automation.running_apps()

    def list_all_windows(self) -> list[TerminalWindow]:
        windows = []
        for app in self.list_running_terminal_apps():
            windows.extend(detection.list_windows(app))
        return windows

    def dispatch_to_app(self, text: str, app_id: str) -> PasteResult:
        return self.dispatcher.dispatch_to_app(text, app_id)

    def dispatch_to_window(self, text: str, app_id: str, window_title: str) -> PasteResult:
        return self.dispatcher.dispatch_to_window(text, app_id, window_title)

    def dispatch_to_most_recent_terminal(self, text: str) -> PasteResult:
        """Paste into the running terminal the user was in last, then press Enter.

        Recency needs the focus tracker running (``start_focus_tracking``);
        until it has samples the first running terminal in catalog order wins.
        """
        return self.dispatcher.dispatch_to_most_recent_terminal(text)

    def has_running_terminals(self) -> bool:
        return len(self.list_running_terminal_apps()) > 0

    def running_terminal_count(self) -> int:
        return len(self.list_running_terminal_apps())

    def find_terminal_by_app_id(self, app_id: str) -> TerminalApp | None:
        for app in self.list_running_terminal_apps():
            if app.app_id == app_id:
                return app
        return None

    def capture_focus(self) -> FrontmostApp | None:
        """Remember the frontmost app as the target for the next ``auto`` paste."""
        return self.focus_tracker.capture()

    def start_focus_tracking(self) -> None:
        self.focus_tracker.start()

    def stop_focus_tracking(self) -> None:
        self.focus_tracker.stop()


_service: TerminalService | None = None
_service_lock = threading.Lock()


def get_terminal_service() -> TerminalService:
    global _service
    with _service_lock:
        if _service is None:
            _service = TerminalService()
        return _service


def list_running_terminal_apps() -> list[TerminalApp]:
    return get_terminal_service().list_running_terminal_apps()


def list_all_windows() -> list[TerminalWindow]:
    return get_terminal_service().list_all_windows()


def dispatch_to_app(text: str, app_id: str) -> PasteResult:
    return get_terminal_service().dispatch_to_app(text, app_id)


def dispatch_to_window(text: str, app_id: str, window_title: str) -> PasteResult:
    return get_terminal_service().dispatch_to_window(text, app_id, window_title)


def dispatch_to_most_recent_terminal(text: str) -> PasteResult:
    return get_terminal_service().dispatch_to_most_recent_terminal(text)
