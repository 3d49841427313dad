from __future__ import annotations

import pytest

from neuralscribe.config import settings
from neuralscribe.injection.runner import AutomationError
from neuralscribe.models import TerminalApp

TERMINAL = TerminalApp("Terminal", "com.apple.Terminal", "Terminal")
ITERM = TerminalApp("iTerm2", "com.googlecode.iterm2", "iTerm2")
WARP = TerminalApp("Warp", "dev.warp.Warp-Stable", "Warp")
CATALOG = [TERMINAL, ITERM, WARP]


class FakeClock:
    """Monotonic clock driven by the test, in whole milliseconds."""

    def __init__(self) -> None:
        self.ms = 0

    def __call__(self) -> float:
        return self.ms / 1000

    def advance(self, seconds: float) -> None:
        self.ms += int(round(seconds * 1000))


class StubAutomation:
    """Records every OS action a dispatcher asks for."""

    def __init__(
        self,
        *,
        running: list[TerminalApp] | None = None,
        clipboard_ok: bool = True,
        activate_error: AutomationError | None = None,
        raise_errors: dict[bool, AutomationError] | None = None,
        paste_error: AutomationError | None = None,
    ) -> None:
        self.running = list(CATALOG if running is None else running)
        self.clipboard_ok = clipboard_ok
        self.activate_error = activate_error
        self.raise_errors = raise_errors or {}
        self.paste_error = paste_error
        self.clipboard: str | None = None
        self.calls: list[tuple] = []

    def actions(self) -> list[str]:
        return [call[0] for call in self.calls if call[0] != "sleep"]

    def write_clipboard(self, text: str) -> bool:
        self.calls.append(("clipboard", text))
        if self.clipboard_ok:
            self.clipboard = text
        return self.clipboard_ok

    def running_apps(self) -> list[TerminalApp]:
        self.calls.append(("running",))
        return list(self.running)

    def lookup_app(self, app_id: str) -> TerminalApp | None:
        return next((app for app in CATALOG if app.app_id == app_id), None)

    def activate_app(self, app_id: str) -> None:
        self.calls.append(("activate", app_id))
        if self.activate_error:
            raise self.activate_error

    def raise_window(self, process_name: str, window_name: str, contains: bool = False) -> None:
        self.calls.append(("raise", process_name, window_name, contains))
        error = self.raise_errors.get(contains)
        if error:
            raise error

    def send_paste(self) -> None:
        self.calls.append(("paste",))
        if self.paste_error:
            raise self.paste_error

    def send_confirm(self) -> None:
        self.calls.append(("confirm",))

    def sleep(self, seconds: float) -> None:
        self.calls.append(("sleep", seconds))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    monkeypatch.setattr(settings, "CONFIG_FILE", config_file)
    for key in ("PASTE_MODE", "FORMATTING_ENABLED", "FORMATTING_MODEL",
                "FORMATTING_INSTRUCTIONS", "FOCUS_SAMPLE_INTERVAL"):
        monkeypatch.delenv(f"NEURALSCRIBE_{key}", raising=False)
    return config_file
