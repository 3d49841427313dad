"""Injection module for Neural Scribe."""

from .clipboard import write_clipboard, read_clipboard

from .detection import (
    get_catalog,
    catalog_entry,
    comm_name,
    is_app_running,
    list_running_terminal_apps,
    list_windows,
    list_all_windows,
    get_frontmost_app,
    activate_app,
    raise_window,
)

from .focus import FocusTracker

from .inject import (
    Dispatcher,
    OSAutomation,
    send_paste_keystroke,
    send_confirm_keystroke,
)

from .lock import PasteLock

from .permissions import FailureKind, classify, has_accessibility_permission

from .runner import AutomationError, AutomationUnavailable

__all__ = [
    # Clipboard
    "write_clipboard",
    "read_clipboard",
    # Detection
    "get_catalog",
    "catalog_entry",
    "comm_name",
    "is_app_running",
    "list_running_terminal_apps",
    "list_windows",
    "list_all_windows",
    "get_frontmost_app",
    "activate_app",
    "raise_window",
    # Dispatch
    "Dispatcher",
    "OSAutomation",
    "PasteLock",
    "FocusTracker",
    "send_paste_keystroke",
    "send_confirm_keystroke",
    # Failures
    "FailureKind",
    "classify",
    "has_accessibility_permission",
    "AutomationError",
    "AutomationUnavailable",
]
