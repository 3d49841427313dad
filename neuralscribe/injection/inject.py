"""Paste dispatch into terminal apps for Neural Scribe."""

import logging
import platform
import time

from neuralscribe.config import (
    APP_ACTIVATE_DELAY,
    CLIPBOARD_SETTLE_DELAY,
    CONFIRM_KEY_DELAY,
    LINUX_CONFIRM_KEY,
    LINUX_PASTE_KEYS,
    WINDOW_RAISE_DELAY,
)
from neuralscribe.injection import clipboard, detection
from neuralscribe.injection.focus import FocusTracker
from neuralscribe.injection.lock import PasteLock
from neuralscribe.injection.permissions import is_permission_error
from neuralscribe.injection.runner import AutomationError, run_osascript, run_tool
from neuralscribe.models import (
    DispatchOptions,
    DispatchOutcome,
    MatchPolicy,
    PasteRequest,
    PasteResult,
    TerminalApp,
)

logger = logging.getLogger("neuralscribe")

PLATFORM = platform.system()

APP_PASTE = DispatchOptions(send_confirm=False, match_policy=MatchPolicy.EXACT)
WINDOW_PASTE = DispatchOptions(send_confirm=False, match_policy=MatchPolicy.EXACT_THEN_CONTAINS)
ACTIVE_TERMINAL_PASTE = DispatchOptions(send_confirm=True, match_policy=MatchPolicy.EXACT)


def send_paste_keystroke() -> None:
    """Send Cmd+V (macOS) or Ctrl+Shift+V (Linux) to the focused window."""
    if PLATFORM == "Darwin":
        run_osascript('tell application "System Events" to keystroke "v" using command down')
    elif PLATFORM == "Linux":
        run_tool(["xdotool", "key", "--clearmodifiers", LINUX_PASTE_KEYS])
    else:
        raise AutomationError(f"Unsupported platform: {PLATFORM}")


def send_confirm_keystroke() -> None:
    """Send Enter to the focused window."""
    if PLATFORM == "Darwin":
        run_osascript('tell application "System Events" to key code 36')
    elif PLATFORM == "Linux":
        run_tool(["xdotool", "key", "--clearmodifiers", LINUX_CONFIRM_KEY])
    else:
        raise AutomationError(f"Unsupported platform: {PLATFORM}")


class OSAutomation:
    """The OS side effects a dispatch needs. Tests swap in a stub."""

    def write_clipboard(self, text: str) -> bool:
        return clipboard.write_clipboard(text)

    def running_apps(self) -> list[TerminalApp]:
        return detection.list_running_terminal_apps()

    def lookup_app(self, app_id: str) -> TerminalApp | None:
        return detection.catalog_entry(app_id)

    def activate_app(self, app_id: str) -> None:
        detection.activate_app(app_id)

    def raise_window(self, process_name: str, window_name: str, contains: bool = False) -> None:
        detection.raise_window(process_name, window_name, contains=contains)

    def send_paste(self) -> None:
        send_paste_keystroke()

    def send_confirm(self) -> None:
        send_confirm_keystroke()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class Dispatcher:
    """Turns one paste request into clipboard write, activation and keystrokes.

    Only one dispatch runs at a time; the PasteLock rejects anything that
    arrives while one is in flight, too soon after the last one, or repeats
    the last text. Every OS failure comes back as a PasteResult.
    """

    def __init__(self, automation: OSAutomation | None = None, lock: PasteLock | None = None,
                 focus_tracker: FocusTracker | None = None):
        self.automation = automation or OSAutomation()
        self.lock = lock or PasteLock()
        self.focus_tracker = focus_tracker

    def resolve_most_recent(self) -> TerminalApp | None:
        """Pick the running terminal the user was in last.

        Recency comes from the focus tracker's samples. Apps it never saw, or
        every app when there is no tracker, are taken in catalog order.
        """
        running = self.automation.running_apps()
        if self.focus_tracker is not None:
            running = self.focus_tracker.rank(running)
        return running[0] if running else None

    def dispatch(self, request: PasteRequest, options: DispatchOptions = APP_PASTE) -> PasteResult:
        text = request.text
        app_id = request.app_id
        if not self.lock.try_acquire(text):
            logger.info("⏸️ Paste rejected (in flight, debounced or duplicate)")
            return PasteResult.rejected()

        copied = False
        target_name = None
        try:
            logger.info("💉 Dispatching paste: %s", text[:50])

            if not self.automation.write_clipboard(text):
                logger.error("Failed to copy to clipboard")
                return PasteResult(False, False, False, DispatchOutcome.AUTOMATION_FAILED)
            copied = True
            self.automation.sleep(CLIPBOARD_SETTLE_DELAY)

            if app_id:
                app = self.automation.lookup_app(app_id)
            else:
                app = self.resolve_most_recent()
                if app is None:
                    logger.warning("No running terminal found, text left on clipboard")
                    return PasteResult(False, False, True, DispatchOutcome.NO_TARGET)
                app_id = app.app_id
            target_name = app.display_name if app else app_id

            self._activate(app_id, app, request.window_name, options.match_policy)

            try:
                self.automation.send_paste()
                if options.send_confirm:
                    self.automation.sleep(CONFIRM_KEY_DELAY)
                    self.automation.send_confirm()
            except AutomationError as e:
                if is_permission_error(e.detail):
                    logger.warning("🔒 Keystroke permission denied for %s: %s", target_name, e.detail)
                    return PasteResult(False, True, True, DispatchOutcome.PERMISSION_DENIED, target_name)
                logger.error("Paste keystroke failed in %s: %s", target_name, e)
                return PasteResult(False, False, True, DispatchOutcome.AUTOMATION_FAILED, target_name)

            logger.info("✅ Pasted into %s", target_name)
            return PasteResult(True, False, True, DispatchOutcome.SUCCESS, target_name)
        except Exception as e:
            logger.error("Paste dispatch failed: %s", e)
            return PasteResult(False, False, copied, DispatchOutcome.AUTOMATION_FAILED, target_name)
        finally:
            self.lock.release()

    def _activate(self, app_id: str, app: TerminalApp | None, window_name: str | None,
                  policy: MatchPolicy) -> None:
        # Best effort: the paste may still land if the app is already frontmost
        try:
            self.automation.activate_app(app_id)
            self.automation.sleep(APP_ACTIVATE_DELAY)
        except AutomationError as e:
            logger.warning("Could not activate %s: %s", app_id, e)

        if not window_name:
            return
        if app is None:
            logger.warning("Unknown app %s, can't raise window '%s'", app_id, window_name)
            return
        try:
            self.automation.raise_window(app.process_name, window_name)
        except AutomationError as e:
            if policy is not MatchPolicy.EXACT_THEN_CONTAINS:
                logger.warning("Could not raise window '%s': %s", window_name, e)
                return
            logger.debug("No exact window match for '%s', trying partial match", window_name)
            try:
                self.automation.raise_window(app.process_name, window_name, contains=True)
            except AutomationError as e:
                logger.warning("Could not raise window '%s': %s", window_name, e)
                return
        self.automation.sleep(WINDOW_RAISE_DELAY)

    def dispatch_to_app(self, text: str, app_id: str) -> PasteResult:
        """Paste into an app by id, without pressing Enter."""
        return self.dispatch(PasteRequest(text, app_id), APP_PASTE)

    def dispatch_to_window(self, text: str, app_id: str, window_title: str) -> PasteResult:
        """Paste into one window of an app, matched by exact then partial title, without pressing Enter."""
        return self.dispatch(PasteRequest(text, app_id, window_title), WINDOW_PASTE)

    def dispatch_to_most_recent_terminal(self, text: str) -> PasteResult:
        """Paste into the most recently active running terminal and press Enter."""
        return self.dispatch(PasteRequest(text), ACTIVE_TERMINAL_PASTE)
