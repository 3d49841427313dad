"""Neural Scribe MCP tools - terminal discovery and paste."""

import asyncio
import json
import logging

from neuralscribe.server import mcp
from neuralscribe.core.pipeline import PastePipeline
from neuralscribe.services.formatting import FormattingService
from neuralscribe.services.terminal import get_terminal_service

logger = logging.getLogger("neuralscribe")

_pipeline: PastePipeline | None = None


def _get_pipeline() -> PastePipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = PastePipeline()
    return _pipeline


@mcp.tool()
async def list_terminals() -> str:
    """List running terminal apps that text can be pasted into.

    Returns:
        JSON list of {name, appId, displayName}
    """
    apps = await asyncio.to_thread(get_terminal_service().list_running_terminal_apps)
    return json.dumps([app.to_dict() for app in apps])


@mcp.tool()
async def list_terminal_windows() -> str:
    """List open windows of every running terminal app.

    Returns:
        JSON list of {appName, appId, windowName, windowIndex, displayName}
    """
    windows = await asyncio.to_thread(get_terminal_service().list_all_windows)
    return json.dumps([window.to_dict() for window in windows])


@mcp.tool()
async def paste_to_terminal(text: str, app_id: str) -> str:
    """Paste text into a terminal app without pressing Enter.

    Args:
        text: Text to paste
        app_id: Application id from list_terminals

    Returns:
        JSON {success, needsPermission, copied}
    """
    result = await asyncio.to_thread(get_terminal_service().dispatch_to_app, text, app_id)
    return json.dumps(result.to_dict())


@mcp.tool()
async def paste_to_terminal_window(text: str, app_id: str, window_name: str) -> str:
    """Paste text into one terminal window without pressing Enter.

    Args:
        text: Text to paste
        app_id: Application id from list_terminal_windows
        window_name: Full windowName from list_terminal_windows

    Returns:
        JSON {success, needsPermission, copied}
    """
    result = await asyncio.to_thread(get_terminal_service().dispatch_to_window, text, app_id, window_name)
    return json.dumps(result.to_dict())


@mcp.tool()
async def paste_to_active_terminal(text: str) -> str:
    """Paste text into the most recently active terminal and press Enter.

    Returns:
        JSON {success, needsPermission, copied, targetApp}
    """
    result = await asyncio.to_thread(get_terminal_service().dispatch_to_most_recent_terminal, text)
    return json.dumps(result.to_dict(include_target=True))


@mcp.tool()
async def begin_dictation() -> str:
    """Call when dictation starts: remembers the frontmost app for an 'auto' paste.

    Returns:
        JSON {captured, appId}
    """
    front = await asyncio.to_thread(get_terminal_service().capture_focus)
    return json.dumps({
        "captured": front.name if front else None,
        "appId": front.app_id if front else None,
    })


@mcp.tool()
async def dictate(text: str, mode: str | None = None) -> str:
    """Format dictated text (if enabled in settings) and deliver it.

    Args:
        text: Raw transcription
        mode: 'auto', 'clipboard' or 'terminal'; defaults to the paste_mode setting

    Returns:
        JSON {status, text, originalText}
    """
    result = await asyncio.to_thread(_get_pipeline().format_and_paste, text, mode)
    return json.dumps({
        "status": result.status,
        "text": result.text,
        "originalText": result.original_text,
    })


@mcp.tool()
async def format_prompt(text: str, instructions: str | None = None) -> str:
    """Reformat text with the Claude CLI.

    Returns:
        JSON {success, formatted, error}
    """
    result = await asyncio.to_thread(FormattingService().reformat_text, text, instructions)
    return json.dumps({"success": result.success, "formatted": result.formatted, "error": result.error})


@mcp.tool()
async def generate_title(text: str) -> str:
    """Generate a 2-5 word title for text.

    Returns:
        JSON {success, title, error}
    """
    result = await asyncio.to_thread(FormattingService().generate_title, text)
    return json.dumps({"success": result.success, "title": result.title, "error": result.error})
