"""AI text formatting through the Claude CLI.

Every failure (CLI missing, timeout, oversized or empty output) returns the
original text with ``success=False`` so dictated text is never lost.
"""

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass

from neuralscribe.config import (
    CLI_PROBE_TIMEOUT,
    FORMAT_MAX_OUTPUT,
    FORMAT_TIMEOUT,
    TITLE_INSTRUCTIONS,
    TITLE_TIMEOUT,
    get_formatting_enabled,
    get_formatting_instructions,
    get_formatting_model,
)

logger = logging.getLogger("neuralscribe")

CLAUDE_CLI = "claude"
TITLE_MODEL = "haiku"
TITLE_FALLBACK_LENGTH = 50


@dataclass
class FormatResult:
    success: bool
    formatted: str
    error: str | None = None
    skipped: bool = False


@dataclass
class TitleResult:
    success: bool
    title: str
    error: str | None = None


@dataclass
class ClaudeCliStatus:
    available: bool
    version: str | None


def _run_claude(text: str, instructions: str, model: str, timeout: float) -> FormatResult:
    """Pipe text into ``claude -p`` and return its answer, or the input on failure."""
    cmd = [CLAUDE_CLI, "-p", "--model", model, "--system-prompt", instructions]
    env = {**os.environ, "FORCE_COLOR": "0"}
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd, input=text, capture_output=True, text=True,
            encoding="utf-8", errors="replace", timeout=timeout, env=env
        )
    except subprocess.TimeoutExpired:
        logger.error("Claude CLI timed out after %ss", timeout)
        return FormatResult(False, text, "Formatting timed out")
    except FileNotFoundError:
        logger.error("Claude CLI not found on PATH")
        return FormatResult(False, text, "Claude CLI not found")
    except OSError as e:
        logger.error("Claude CLI failed to start: %s", e)
        return FormatResult(False, text, str(e))

    logger.debug("Claude CLI finished in %.0fms", (time.monotonic() - start) * 1000)

    stdout = result.stdout or ""
    if len(stdout.encode("utf-8")) > FORMAT_MAX_OUTPUT:
        logger.error("Claude CLI output exceeded %d bytes", FORMAT_MAX_OUTPUT)
        return FormatResult(False, text, "Output too large")

    if result.returncode != 0:
        error = (result.stderr or "").strip() or f"Claude CLI exited with code {result.returncode}"
        logger.error("Claude CLI error: %s", error)
        return FormatResult(False, text, error)

    formatted = stdout.strip()
    if not formatted:
        logger.warning("Empty response from Claude CLI")
        return FormatResult(False, text, "Empty response")
    return FormatResult(True, formatted)


def format_prompt(text: str, instructions: str | None = None, model: str = "sonnet") -> FormatResult:
    """Reformat a raw transcription into a clean prompt."""
    if not text.strip():
        return FormatResult(False, text, "Empty text")
    logger.info("✨ Formatting prompt with Claude CLI (%s)", model)
    return _run_claude(text, instructions or get_formatting_instructions(), model, FORMAT_TIMEOUT)


def generate_title(text: str) -> TitleResult:
    """Summarize text as a 2-5 word title, falling back to its first 50 characters."""
    fallback = text[:TITLE_FALLBACK_LENGTH]
    if not text.strip():
        return TitleResult(False, fallback, "Empty text")

    result = _run_claude(text, TITLE_INSTRUCTIONS, TITLE_MODEL, TITLE_TIMEOUT)
    if not result.success:
        return TitleResult(False, fallback, result.error)

    title = result.formatted.splitlines()[0].strip().strip('"\'')
    if not title:
        return TitleResult(False, fallback, "Empty response")
    return TitleResult(True, title)


def is_claude_cli_available() -> bool:
    return shutil.which(CLAUDE_CLI) is not None


def get_claude_cli_version() -> str | None:
    try:
        result = subprocess.run(
            [CLAUDE_CLI, "--version"], capture_output=True, text=True, timeout=CLI_PROBE_TIMEOUT
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Claude CLI version check failed: %s", e)
    return None


class FormattingService:
    """Formatting driven by the user's settings."""

    def format_prompt(self, text: str) -> FormatResult:
        if not get_formatting_enabled():
            return FormatResult(True, text, skipped=True)
        return format_prompt(text, get_formatting_instructions(), get_formatting_model())

    def reformat_text(self, text: str, custom_instructions: str | None = None) -> FormatResult:
        """One-off reformat, with custom instructions taking precedence over settings."""
        instructions = custom_instructions or get_formatting_instructions()
        return format_prompt(text, instructions, get_formatting_model())

    def generate_title(self, text: str) -> TitleResult:
        return generate_title(text)

    def check_cli_status(self) -> ClaudeCliStatus:
        available = is_claude_cli_available()
        version = get_claude_cli_version() if available else None
        return ClaudeCliStatus(available, version)
