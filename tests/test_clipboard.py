from __future__ import annotations

import subprocess

import pytest

from neuralscribe.injection import clipboard


class FakeClipboardTools:
    """Stands in for pbcopy/pbpaste and the Linux clipboard tools."""

    def __init__(self, fail: bool = False) -> None:
        self.data = b""
        self.commands: list[list[str]] = []
        self.fail = fail

    def run(self, cmd, input=None, **kwargs):
        self.commands.append(list(cmd))
        if self.fail:
            raise subprocess.CalledProcessError(1, cmd)
        if input is not None:
            self.data = input
            return subprocess.CompletedProcess(cmd, 0, stdout=b"")
        return subprocess.CompletedProcess(cmd, 0, stdout=self.data)


@pytest.fixture
def tools(monkeypatch) -> FakeClipboardTools:
    fake = FakeClipboardTools()
    monkeypatch.setattr(clipboard.subprocess, "run", fake.run)
    return fake


@pytest.mark.parametrize("text", [
    'echo "it\'s done"',
    "line one\nline two\n",
    "col\tcol\tcol",
    "café 日本語 🎤",
    "$(rm -rf /) `whoami` \\n",
])
def test_macos_round_trip_is_exact(monkeypatch, tools, text: str) -> None:
    monkeypatch.setattr(clipboard, "PLATFORM", "Darwin")

    assert clipboard.write_clipboard(text) is True
    assert clipboard.read_clipboard() == text
    assert tools.commands == [["pbcopy"], ["pbpaste"]]
    assert tools.data == text.encode("utf-8")


def test_linux_uses_first_installed_tool(monkeypatch, tools) -> None:
    monkeypatch.setattr(clipboard, "PLATFORM", "Linux")
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: "/usr/bin/xsel" if name == "xsel" else None)

    assert clipboard.write_clipboard("ls -la") is True
    assert clipboard.read_clipboard() == "ls -la"
    assert tools.commands == [["xsel", "--clipboard", "--input"], ["xsel", "--clipboard", "--output"]]


def test_wayland_prefers_wl_copy(monkeypatch, tools) -> None:
    monkeypatch.setattr(clipboard, "PLATFORM", "Linux")
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")

    assert clipboard.write_clipboard("pwd") is True
    assert tools.commands == [["wl-copy"]]


def test_linux_without_clipboard_tool(monkeypatch, tools) -> None:
    monkeypatch.setattr(clipboard, "PLATFORM", "Linux")
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)

    assert clipboard.write_clipboard("ls") is False
    assert clipboard.read_clipboard() is None
    assert tools.commands == []


def test_tool_failure_returns_false(monkeypatch) -> None:
    fake = FakeClipboardTools(fail=True)
    monkeypatch.setattr(clipboard.subprocess, "run", fake.run)
    monkeypatch.setattr(clipboard, "PLATFORM", "Darwin")

    assert clipboard.write_clipboard("ls") is False
    assert clipboard.read_clipboard() is None


def test_unsupported_platform(monkeypatch, tools) -> None:
    monkeypatch.setattr(clipboard, "PLATFORM", "Windows")

    assert clipboard.write_clipboard("dir") is False
    assert tools.commands == []
