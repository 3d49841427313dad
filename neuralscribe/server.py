#!/usr/bin/env python
"""Neural Scribe MCP Server - paste dictated text into terminals."""

import os
import platform

if platform.system() == "Darwin":
    # GUI-launched processes miss Homebrew paths, where the claude CLI usually lives
    homebrew_paths = ["/opt/homebrew/bin", "/usr/local/bin"]
    current_path = os.environ.get("PATH", "")
    paths_to_add = [p for p in homebrew_paths if p not in current_path]
    if paths_to_add:
        os.environ["PATH"] = ":".join(paths_to_add) + ":" + current_path

from fastmcp import FastMCP

mcp = FastMCP("neuralscribe")

from . import tools  # noqa: E402,F401
from . import prompts  # noqa: E402,F401


def main():
    """Run the Neural Scribe MCP server."""
    from .logging_setup import setup_logging
    from .services.terminal import get_terminal_service
    from . import __version__

    logger = setup_logging()
    logger.info("Starting Neural Scribe v%s", __version__)

    get_terminal_service().start_focus_tracking()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
