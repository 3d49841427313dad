"""Neural Scribe prompts."""

from neuralscribe.server import mcp


@mcp.prompt()
def dictate() -> str:
    """Send dictated text to the terminal the user was working in."""
    return """Use the list_terminals tool to see which terminal apps are running.

When the user dictates text for their terminal:
1. Call paste_to_active_terminal with the text, unless they named a specific app or window
   (in auto paste mode, call begin_dictation when recording starts and dictate with the text)
2. For a named window, call list_terminal_windows and then paste_to_terminal_window with its exact windowName
3. If the result says needsPermission, tell the user to allow Accessibility access for this app in System Settings
4. If only copied is true, tell the user the text is on the clipboard so they can paste it by hand"""
