from __future__ import annotations

import pytest

from conftest import CATALOG, ITERM, TERMINAL, WARP
from neuralscribe.injection import detection
from neuralscribe.injection.runner import AutomationError
from neuralscribe.models import FrontmostApp


class FakeSystemEvents:
    """Answers the constant AppleScripts detection sends through osascript."""

    def __init__(self, running=(), windows=None, broken=()) -> None:
        self.running = set(running)
        self.windows = windows or {}
        self.broken = set(broken)
        self.calls: list[tuple] = []

    def __call__(self, script: str, *args: str, timeout: float = 5) -> str:
        self.calls.append((script, args))
        name = args[0] if args else ""
        if name in self.broken:
            raise AutomationError("osascript exited with code 1", stderr="Connection is invalid. (-609)")
        if script is detection._PROCESS_RUNNING_SCRIPT:
            return "true" if name in self.running else "false"
        if script is detection._WINDOW_NAMES_SCRIPT:
            return "\n".join(self.windows.get(name, []))
        if script is detection._FRONTMOST_SCRIPT:
            return "iTerm2\ncom.googlecode.iterm2\n4242"
        return ""


@pytest.fixture
def macos(monkeypatch):
    monkeypatch.setattr(detection, "PLATFORM", "Darwin")

    def install(**kwargs) -> FakeSystemEvents:
        fake = FakeSystemEvents(**kwargs)
        monkeypatch.setattr(detection, "run_osascript", fake)
        return fake

    return install


def test_running_apps_keep_catalog_order(macos) -> None:
    macos(running={"Warp", "Terminal"})

    assert detection.list_running_terminal_apps(CATALOG) == [TERMINAL, WARP]


def test_failed_process_check_counts_as_not_running(macos) -> None:
    macos(running={"Terminal", "iTerm2", "Warp"}, broken={"iTerm2"})

    assert detection.list_running_terminal_apps(CATALOG) == [TERMINAL, WARP]


def test_app_names_travel_as_arguments(macos) -> None:
    fake = macos(running={'Evil" & do shell script "id'})

    assert detection.is_app_running('Evil" & do shell script "id') is True
    script, args = fake.calls[0]
    assert args == ('Evil" & do shell script "id',)
    assert "Evil" not in script


def test_long_window_titles_are_shortened_for_display(macos) -> None:
    title = "x" * 60
    macos(running={"Terminal"}, windows={"Terminal": [title, "zsh"]})

    windows = detection.list_windows(TERMINAL)

    assert windows[0].window_name == title
    assert windows[0].display_name == "Terminal: " + "x" * 47 + "..."
    assert windows[0].window_index == 1
    assert windows[1].display_name == "Terminal: zsh"
    assert windows[1].window_index == 2


def test_fifty_character_title_is_not_shortened() -> None:
    assert detection.shorten_title("y" * 50) == "y" * 50
    assert detection.shorten_title("y" * 51) == "y" * 47 + "..."


def test_app_with_no_windows_yields_nothing(macos) -> None:
    macos(running={"Terminal"}, windows={"Terminal": []})

    assert detection.list_windows(TERMINAL) == []


def test_window_listing_failure_yields_nothing(macos) -> None:
    macos(running={"iTerm2"}, broken={"iTerm2"})

    assert detection.list_windows(ITERM) == []


def test_all_windows_grouped_in_catalog_order(macos) -> None:
    macos(
        running={"Terminal", "Warp"},
        windows={"Warp": ["agent"], "Terminal": ["build", "logs"]},
    )

    windows = detection.list_all_windows(CATALOG)

    assert [(w.app_id, w.window_name, w.window_index) for w in windows] == [
        (TERMINAL.app_id, "build", 1),
        (TERMINAL.app_id, "logs", 2),
        (WARP.app_id, "agent", 1),
    ]
    assert windows[2].to_dict() == {
        "appName": "Warp",
        "appId": WARP.app_id,
        "windowName": "agent",
        "windowIndex": 1,
        "displayName": "Warp: agent",
    }


def test_frontmost_app_on_macos(macos) -> None:
    macos()

    assert detection.get_frontmost_app() == FrontmostApp("iTerm2", "com.googlecode.iterm2", 4242)


def test_raise_window_picks_script_by_match(macos) -> None:
    fake = macos()

    detection.raise_window("iTerm2", "build")
    detection.raise_window("iTerm2", "build", contains=True)

    assert fake.calls[0] == (detection._RAISE_WINDOW_EXACT_SCRIPT, ("iTerm2", "build"))
    assert fake.calls[1] == (detection._RAISE_WINDOW_CONTAINS_SCRIPT, ("iTerm2", "build"))


class FakeX11:
    """pgrep, ps and xdotool answers for a GNOME Terminal with two windows.

    pgrep matches like procps: against the kernel's 15-character comm name,
    with longer patterns never matching.
    """

    COMM = {"gnome-terminal-": "1200"}

    def __init__(self, closed=()) -> None:
        self.calls: list[list[str]] = []
        self.closed = set(closed)

    def __call__(self, cmd: list[str], timeout: float = 5) -> str:
        self.calls.append(cmd)
        if cmd[0] == "pgrep":
            pattern = cmd[-1]
            if len(pattern) > 15 or pattern not in self.COMM:
                raise AutomationError("pgrep exited with code 1", returncode=1)
            return self.COMM[pattern]
        if cmd[0] == "ps":
            return "gnome-terminal-"
        if cmd[:2] == ["xdotool", "getactivewindow"]:
            return "1200"
        if cmd[:2] == ["xdotool", "search"]:
            return "71303171\n71303200"
        if cmd[:2] == ["xdotool", "getwindowname"]:
            if cmd[2] in self.closed:
                raise AutomationError("xdotool exited with code 1", stderr="BadWindow (invalid Window parameter)")
            return {"71303171": "~/src: vim", "71303200": "~/src/build: make"}[cmd[2]]
        return ""


@pytest.fixture
def x11(monkeypatch):
    monkeypatch.setattr(detection, "PLATFORM", "Linux")

    def install(**kwargs) -> FakeX11:
        fake = FakeX11(**kwargs)
        monkeypatch.setattr(detection, "run_tool", fake)
        return fake

    return install


def test_long_linux_process_name_is_found_by_comm(x11) -> None:
    fake = x11()

    assert detection.comm_name("gnome-terminal-server") == "gnome-terminal-"
    assert detection.is_app_running("gnome-terminal-server") is True
    assert fake.calls[0] == ["pgrep", "-x", "gnome-terminal-"]
    assert detection.is_app_running("konsole") is False


def test_gnome_terminal_listed_as_running(x11) -> None:
    x11()

    running = detection.list_running_terminal_apps()

    assert [app.app_id for app in running] == ["org.gnome.Terminal"]


def test_linux_frontmost_resolves_truncated_name(x11) -> None:
    x11()

    assert detection.get_frontmost_app() == FrontmostApp("gnome-terminal-", "org.gnome.Terminal", 1200)


def test_linux_windows_and_raise(x11) -> None:
    fake = x11()

    assert detection.get_window_titles("gnome-terminal-server") == ["~/src: vim", "~/src/build: make"]

    detection.raise_window("gnome-terminal-server", "build", contains=True)
    assert fake.calls[-1] == ["xdotool", "windowactivate", "--sync", "71303200"]

    with pytest.raises(AutomationError):
        detection.raise_window("gnome-terminal-server", "build")


def test_window_that_vanishes_is_skipped(x11) -> None:
    x11(closed={"71303171"})
    gnome = detection.catalog_entry("org.gnome.Terminal")

    windows = detection.list_windows(gnome)

    assert [(w.window_name, w.window_index) for w in windows] == [("~/src/build: make", 1)]
    assert windows[0].display_name == "GNOME Terminal: ~/src/build: make"
