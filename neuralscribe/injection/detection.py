"""Terminal application and window detection for Neural Scribe."""

import logging
import platform

from neuralscribe.config import LINUX_COMM_MAX, TERMINAL_CATALOG, WINDOW_TITLE_KEEP, WINDOW_TITLE_MAX
from neuralscribe.injection.runner import AutomationError, run_osascript, run_tool
from neuralscribe.models import FrontmostApp, TerminalApp, TerminalWindow

logger = logging.getLogger("neuralscribe")

PLATFORM = platform.system()

_PROCESS_RUNNING_SCRIPT = '''
on run argv
    tell application "System Events" to return (name of processes) contains (item 1 of argv)
end run
'''

# System Events sees windows of Electron apps too, unlike each app's own dictionary
_WINDOW_NAMES_SCRIPT = '''
on run argv
    tell application "System Events"
        tell process (item 1 of argv)
            set windowNames to name of every window
        end tell
    end tell
    set found to {}
    repeat with windowName in windowNames
        set windowName to contents of windowName
        if windowName is not missing value then set end of found to windowName
    end repeat
    set AppleScript's text item delimiters to linefeed
    return found as text
end run
'''

_FRONTMOST_SCRIPT = '''
tell application "System Events"
    set frontApp to first application process whose frontmost is true
    set appId to ""
    try
        set appId to bundle identifier of frontApp
    end try
    if appId is missing value then set appId to ""
    return (name of frontApp) & linefeed & appId & linefeed & (unix id of frontApp)
end tell
'''

_ACTIVATE_SCRIPT = '''
on run argv
    tell application id (item 1 of argv) to activate
end run
'''

_RAISE_WINDOW_EXACT_SCRIPT = '''
on run argv
    tell application "System Events"
        tell process (item 1 of argv)
            perform action "AXRaise" of (first window whose name is (item 2 of argv))
            set frontmost to true
        end tell
    end tell
end run
'''

_RAISE_WINDOW_CONTAINS_SCRIPT = '''
on run argv
    tell application "System Events"
        tell process (item 1 of argv)
            perform action "AXRaise" of (first window whose name contains (item 2 of argv))
            set frontmost to true
        end tell
    end tell
end run
'''


def get_catalog() -> list[TerminalApp]:
    """Terminal apps known on this platform, in lookup priority order."""
    return list(TERMINAL_CATALOG.get(PLATFORM, []))


def catalog_entry(app_id: str) -> TerminalApp | None:
    for app in get_catalog():
        if app.app_id == app_id:
            return app
    return None


def comm_name(process_name: str) -> str:
    """The process name as Linux reports it, cut to the kernel's comm length."""
    return process_name[:LINUX_COMM_MAX]


def is_app_running(process_name: str) -> bool:
    """Ask the OS whether a process with this name is running.

    Any failure to ask counts as "not running".
    """
    try:
        if PLATFORM == "Darwin":
            return run_osascript(_PROCESS_RUNNING_SCRIPT, process_name) == "true"
        elif PLATFORM == "Linux":
            return bool(run_tool(["pgrep", "-x", comm_name(process_name)]))
        else:
            return False
    except AutomationError as e:
        logger.debug("Process check for '%s' failed: %s", process_name, e)
        return False


def list_running_terminal_apps(catalog: list[TerminalApp] | None = None) -> list[TerminalApp]:
    """Return the catalog entries whose process is currently running, in catalog order."""
    apps = get_catalog() if catalog is None else catalog
    return [app for app in apps if is_app_running(app.process_name)]


def _linux_windows(process_name: str) -> list[tuple[str, str]]:
    """(window id, title) pairs for every visible window of a process."""
    windows = []
    pids = run_tool(["pgrep", "-x", comm_name(process_name)]).split()
    for pid in pids:
        try:
            window_ids = run_tool(["xdotool", "search", "--onlyvisible", "--pid", pid]).split()
        except AutomationError:
            # xdotool search exits 1 when nothing matches
            continue
        for window_id in window_ids:
            try:
                title = run_tool(["xdotool", "getwindowname", window_id])
            except AutomationError as e:
                # The window can close between search and getwindowname
                logger.debug("Skipping window %s of %s: %s", window_id, process_name, e)
                continue
            windows.append((window_id, title))
    return windows


def get_window_titles(process_name: str) -> list[str]:
    if PLATFORM == "Darwin":
        out = run_osascript(_WINDOW_NAMES_SCRIPT, process_name)
        return [line for line in out.split("\n") if line.strip()]
    elif PLATFORM == "Linux":
        return [title for _, title in _linux_windows(process_name) if title.strip()]
    return []


def shorten_title(title: str) -> str:
    if len(title) > WINDOW_TITLE_MAX:
        return title[:WINDOW_TITLE_KEEP] + "..."
    return title


def list_windows(app: TerminalApp) -> list[TerminalWindow]:
    """List the open windows of one running terminal app.

    An app whose windows can't be listed yields no entries at all.
    """
    try:
        titles = get_window_titles(app.process_name)
    except AutomationError as e:
        logger.debug("Window listing for %s failed: %s", app.process_name, e)
        return []

    return [
        TerminalWindow(
            app_name=app.process_name,
            app_id=app.app_id,
            window_name=title,
            window_index=index,
            display_name=f"{app.display_name}: {shorten_title(title)}",
        )
        for index, title in enumerate(titles, start=1)
    ]


def list_all_windows(catalog: list[TerminalApp] | None = None) -> list[TerminalWindow]:
    """Windows of every running terminal app, grouped in catalog order."""
    windows = []
    for app in list_running_terminal_apps(catalog):
        windows.extend(list_windows(app))
    return windows


def get_frontmost_app() -> FrontmostApp | None:
    """Get the frontmost application, or None if it can't be determined."""
    try:
        if PLATFORM == "Darwin":
            out = run_osascript(_FRONTMOST_SCRIPT)
            parts = out.split("\n")
            if not parts or not parts[0]:
                return None
            name = parts[0].strip()
            app_id = parts[1].strip() if len(parts) > 1 else ""
            pid = int(parts[2]) if len(parts) > 2 and parts[2].strip().isdigit() else None
            return FrontmostApp(name=name, app_id=app_id, pid=pid)
        elif PLATFORM == "Linux":
            pid = run_tool(["xdotool", "getactivewindow", "getwindowpid"])
            name = run_tool(["ps", "-p", pid, "-o", "comm="])
            entry = next((app for app in get_catalog() if comm_name(app.process_name) == name), None)
            return FrontmostApp(name=name, app_id=entry.app_id if entry else "", pid=int(pid))
        return None
    except (AutomationError, ValueError) as e:
        logger.debug("Frontmost app lookup failed: %s", e)
        return None


def activate_app(app_id: str) -> None:
    """Bring an application to the front. Raises AutomationError on failure."""
    if PLATFORM == "Darwin":
        run_osascript(_ACTIVATE_SCRIPT, app_id)
    elif PLATFORM == "Linux":
        app = catalog_entry(app_id)
        if app is None:
            raise AutomationError(f"Unknown application id: {app_id}")
        windows = _linux_windows(app.process_name)
        if not windows:
            raise AutomationError(f"No windows found for {app.process_name}")
        run_tool(["xdotool", "windowactivate", "--sync", windows[0][0]])
    else:
        raise AutomationError(f"Unsupported platform: {PLATFORM}")


def raise_window(process_name: str, window_name: str, contains: bool = False) -> None:
    """Raise one window of a process by title. Raises AutomationError if none matches."""
    if PLATFORM == "Darwin":
        script = _RAISE_WINDOW_CONTAINS_SCRIPT if contains else _RAISE_WINDOW_EXACT_SCRIPT
        run_osascript(script, process_name, window_name)
    elif PLATFORM == "Linux":
        for window_id, title in _linux_windows(process_name):
            if (window_name in title) if contains else (title == window_name):
                run_tool(["xdotool", "windowactivate", "--sync", window_id])
                return
        raise AutomationError(f"No window of {process_name} named '{window_name}'")
    else:
        raise AutomationError(f"Unsupported platform: {PLATFORM}")
