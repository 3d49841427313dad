#!/usr/bin/env python
"""Neural Scribe CLI - terminal discovery, paste and formatting commands."""

import json
import sys

import click

from neuralscribe import __version__
from neuralscribe.config import PASTE_MODES, get_paste_mode
from neuralscribe.core.pipeline import PastePipeline, paste_status
from neuralscribe.injection import get_catalog, has_accessibility_permission
from neuralscribe.services.formatting import FormattingService
from neuralscribe.services.terminal import get_terminal_service


def print_success(message: str):
    click.echo(click.style(f"✅ {message}", fg='green'))


def print_warning(message: str):
    click.echo(click.style(f"⚠️  {message}", fg='yellow'))


def print_error(message: str):
    click.echo(click.style(f"❌ {message}", fg='red'), err=True)


def report_paste(status: str, target: str | None = None):
    """Print a pipeline/paste status the way the user needs to act on it."""
    if status == "success":
        print_success(f"Pasted into {target}" if target else "Pasted")
    elif status == "copied":
        print_warning("Text is on the clipboard - paste it manually")
    elif status == "permission":
        print_warning("Text is on the clipboard, but keystrokes were blocked.")
        click.echo("  Grant Accessibility access in System Settings > Privacy & Security > Accessibility")
    elif status == "no-terminal":
        print_warning("No running terminal found - text is on the clipboard")
    elif status in ("rejected", "busy"):
        print_warning("Another paste just ran - nothing sent")
    else:
        print_error("Paste failed")


@click.group()
@click.version_option(__version__, prog_name="neuralscribe")
@click.option('-v', '--verbose', is_flag=True, help='Log automation steps to the console')
def cli(verbose):
    """Neural Scribe - paste dictated text into your terminal."""
    if verbose:
        from neuralscribe.logging_setup import setup_logging
        setup_logging()


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a table')
def terminals(as_json):
    """List running terminal apps."""
    apps = get_terminal_service().list_running_terminal_apps()
    if as_json:
        click.echo(json.dumps([app.to_dict() for app in apps], indent=2))
        return
    if not apps:
        click.echo("No supported terminal is running.")
        click.echo("Supported: " + ", ".join(app.display_name for app in get_catalog()))
        return
    for app in apps:
        click.echo(f"  {app.display_name:<16} {app.app_id}")


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a table')
def windows(as_json):
    """List open windows of running terminal apps."""
    found = get_terminal_service().list_all_windows()
    if as_json:
        click.echo(json.dumps([w.to_dict() for w in found], indent=2))
        return
    if not found:
        click.echo("No terminal windows found.")
        return
    for window in found:
        click.echo(f"  {window.window_index:>2}. {window.display_name}  [{window.app_id}]")


@cli.command()
@click.argument('text')
@click.option('--app', 'app_id', help='Application id to paste into (see `terminals`)')
@click.option('--window', 'window_title', help='Window title to paste into (needs --app)')
@click.option('--mode', type=click.Choice(PASTE_MODES), help='Paste mode when no --app is given')
@click.option('--format/--no-format', 'format_text', default=None,
              help='Reformat with Claude first (default: formatting setting)')
def paste(text, app_id, window_title, mode, format_text):
    """Paste TEXT into a terminal.

    \b
    Examples:
      neuralscribe paste "git status"                       # most recent terminal, presses Enter
      neuralscribe paste "ls" --app com.googlecode.iterm2   # specific app, no Enter
      neuralscribe paste "make" --app com.apple.Terminal --window "build"
    """
    if window_title and not app_id:
        raise click.UsageError("--window needs --app")

    service = get_terminal_service()
    if app_id:
        if service.find_terminal_by_app_id(app_id) is None:
            print_warning(f"{app_id} is not a running terminal - trying anyway")
        if format_text is not False:
            formatter = FormattingService()
            formatted = formatter.reformat_text(text) if format_text else formatter.format_prompt(text)
            text = formatted.formatted
        if window_title:
            result = service.dispatch_to_window(text, app_id, window_title)
        else:
            result = service.dispatch_to_app(text, app_id)
        status = paste_status(result)
        report_paste(status, result.target_app)
    else:
        mode = mode or get_paste_mode()
        if mode == "auto":
            # The shell this command was typed in is the app in front right now
            service.capture_focus()
        outcome = PastePipeline(terminal=service).format_and_paste(text, mode=mode, format_text=format_text)
        status = outcome.status
        report_paste(status, outcome.paste.target_app if outcome.paste else None)

    if status != "success":
        sys.exit(1)


@cli.command(name="format")
@click.argument('text')
@click.option('-i', '--instructions', help='Custom formatting instructions')
def format_command(text, instructions):
    """Reformat TEXT with the Claude CLI and print it."""
    result = FormattingService().reformat_text(text, instructions)
    if not result.success:
        print_error(f"Formatting failed: {result.error}")
    click.echo(result.formatted)
    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument('text')
def title(text):
    """Print a short title for TEXT."""
    result = FormattingService().generate_title(text)
    click.echo(result.title)
    if not result.success:
        sys.exit(1)


@cli.command()
def status():
    """Check automation permission, terminals and the Claude CLI."""
    if has_accessibility_permission():
        print_success("Automation permission: granted")
    else:
        print_warning("Automation permission: not granted")
        click.echo("  Grant Accessibility access in System Settings > Privacy & Security > Accessibility")

    service = get_terminal_service()
    if service.has_running_terminals():
        print_success(f"Running terminals: {service.running_terminal_count()}")
    else:
        print_warning("Running terminals: none")

    cli_status = FormattingService().check_cli_status()
    if cli_status.available:
        print_success(f"Claude CLI: {cli_status.version or 'available'}")
    else:
        print_warning("Claude CLI: not found (formatting falls back to raw text)")


@cli.command()
def serve():
    """Run the MCP server on stdio."""
    from neuralscribe.server import main as server_main
    server_main()


def main():
    cli()


if __name__ == "__main__":
    main()
