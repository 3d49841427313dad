"""Clipboard utilities for Neural Scribe."""

import logging
import os
import platform
import shutil
import subprocess

from neuralscribe.config import AUTOMATION_TIMEOUT

logger = logging.getLogger("neuralscribe")

PLATFORM = platform.system()

_LINUX_COPY_COMMANDS = [
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["wl-copy"],
]
_LINUX_PASTE_COMMANDS = [
    ["xclip", "-selection", "clipboard", "-o"],
    ["xsel", "--clipboard", "--output"],
    ["wl-paste", "--no-newline"],
]


def _utf8_env() -> dict:
    # pbcopy/pbpaste pick the text encoding from the locale
    env = dict(os.environ)
    env.setdefault("LANG", "en_US.UTF-8")
    env["LC_CTYPE"] = "UTF-8"
    return env


def _linux_commands(commands: list[list[str]]) -> list[list[str]]:
    if os.environ.get("WAYLAND_DISPLAY"):
        return commands[-1:] + commands[:-1]
    return commands


def write_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    The text is handed to the clipboard tool on stdin as UTF-8 bytes, so
    quotes, newlines, tabs and non-ASCII content arrive unchanged.
    """
    data = text.encode("utf-8")
    try:
        if PLATFORM == "Darwin":
            subprocess.run(["pbcopy"], input=data, check=True, env=_utf8_env(), timeout=AUTOMATION_TIMEOUT)
            return True
        elif PLATFORM == "Linux":
            for cmd in _linux_commands(_LINUX_COPY_COMMANDS):
                if shutil.which(cmd[0]):
                    subprocess.run(cmd, input=data, check=True, timeout=AUTOMATION_TIMEOUT)
                    return True
            logger.error("No clipboard tool found (xclip, xsel, or wl-copy)")
            return False
        else:
            logger.error("Unsupported platform: %s", PLATFORM)
            return False
    except Exception as e:
        logger.error("Clipboard copy failed: %s", e)
        return False


def read_clipboard() -> str | None:
    """Read text from the system clipboard, or None if it can't be read."""
    try:
        if PLATFORM == "Darwin":
            result = subprocess.run(
                ["pbpaste"], capture_output=True, check=True, env=_utf8_env(), timeout=AUTOMATION_TIMEOUT
            )
            return result.stdout.decode("utf-8", errors="replace")
        elif PLATFORM == "Linux":
            for cmd in _linux_commands(_LINUX_PASTE_COMMANDS):
                if shutil.which(cmd[0]):
                    result = subprocess.run(cmd, capture_output=True, check=True, timeout=AUTOMATION_TIMEOUT)
                    return result.stdout.decode("utf-8", errors="replace")
            logger.error("No clipboard tool found (xclip, xsel, or wl-paste)")
            return None
        else:
            logger.error("Unsupported platform: %s", PLATFORM)
            return None
    except Exception as e:
        logger.error("Clipboard read failed: %s", e)
        return None
