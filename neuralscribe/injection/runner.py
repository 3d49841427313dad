"""Subprocess runner for OS automation tools (osascript, xdotool, pgrep)."""

import logging
import shutil
import subprocess

from neuralscribe.config import AUTOMATION_TIMEOUT

logger = logging.getLogger("neuralscribe")


class AutomationError(Exception):
    """An automation tool failed. ``stderr`` holds what the OS reported."""

    def __init__(self, message: str, stderr: str = "", returncode: int | None = None):
        super().__init__(message)
        self.stderr = stderr or ""
        self.returncode = returncode

    @property
    def detail(self) -> str:
        return self.stderr or str(self)


class AutomationUnavailable(AutomationError):
    """The automation tool is not installed on this machine."""


def run_tool(cmd: list[str], timeout: float = AUTOMATION_TIMEOUT) -> str:
    """Run an automation command and return its stripped stdout.

    Raises AutomationError on a non-zero exit, a timeout, or a failure to start.
    """
    if shutil.which(cmd[0]) is None:
        raise AutomationUnavailable(f"{cmd[0]} not found")
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True,
            encoding="utf-8", errors="replace", timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise AutomationError(f"{cmd[0]} timed out after {timeout}s") from e
    except OSError as e:
        raise AutomationError(f"{cmd[0]} failed to start: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise AutomationError(
            f"{cmd[0]} exited with code {result.returncode}: {stderr}",
            stderr=stderr, returncode=result.returncode
        )
    return (result.stdout or "").strip()


def run_osascript(script: str, *args: str, timeout: float = AUTOMATION_TIMEOUT) -> str:
    """Run a constant AppleScript, passing values through ``argv``.

    Scripts read their inputs with ``item N of argv`` inside ``on run argv``,
    so titles and app ids are never spliced into the script source.
    """
    return run_tool(["osascript", "-e", script, *args], timeout=timeout)
