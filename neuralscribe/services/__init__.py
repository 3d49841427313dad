"""Services module for Neural Scribe."""

from .formatting import (
    FormatResult,
    TitleResult,
    ClaudeCliStatus,
    FormattingService,
    format_prompt,
    generate_title,
    is_claude_cli_available,
    get_claude_cli_version,
)

from .terminal import (
    TerminalService,
    get_terminal_service,
    list_running_terminal_apps,
    list_all_windows,
    dispatch_to_app,
    dispatch_to_window,
    dispatch_to_most_recent_terminal,
)

__all__ = [
    # Formatting
    "FormatResult",
    "TitleResult",
    "ClaudeCliStatus",
    "FormattingService",
    "format_prompt",
    "generate_title",
    "is_claude_cli_available",
    "get_claude_cli_version",
    # Terminal
    "TerminalService",
    "get_terminal_service",
    "list_running_terminal_apps",
    "list_all_windows",
    "dispatch_to_app",
    "dispatch_to_window",
    "dispatch_to_most_recent_terminal",
]
