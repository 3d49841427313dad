"""MCP tools for Neural Scribe."""

from . import terminal_tools  # noqa: F401
