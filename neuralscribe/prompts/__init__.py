"""MCP prompts for Neural Scribe."""

from . import dictate  # noqa: F401
