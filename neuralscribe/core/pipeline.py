"""Format-then-paste pipeline for dictated text."""

import logging
import threading
from dataclasses import dataclass

from neuralscribe.config import get_paste_mode
from neuralscribe.injection import clipboard
from neuralscribe.models import DispatchOutcome, PasteResult
from neuralscribe.services.formatting import FormattingService
from neuralscribe.services.terminal import TerminalService, get_terminal_service

logger = logging.getLogger("neuralscribe")

_OUTCOME_STATUS = {
    DispatchOutcome.SUCCESS: "success",
    DispatchOutcome.LOCK_REJECTED: "rejected",
    DispatchOutcome.NO_TARGET: "no-terminal",
    DispatchOutcome.PERMISSION_DENIED: "permission",
}


@dataclass
class PipelineResult:
    """What happened to one dictation.

    ``original_text`` is always the raw input; ``text`` is what was pasted
    or copied (the formatted text when formatting worked).
    """

    status: str
    original_text: str
    text: str
    formatted_text: str | None = None
    paste: PasteResult | None = None
    error: str | None = None


def paste_status(result: PasteResult) -> str:
    status = _OUTCOME_STATUS.get(result.outcome)
    if status:
        return status
    return "copied" if result.copied else "error"


class PastePipeline:
    def __init__(self, terminal: TerminalService | None = None, formatter: FormattingService | None = None,
                 write_clipboard=clipboard.write_clipboard):
        self.terminal = terminal or get_terminal_service()
        self.formatter = formatter or FormattingService()
        self._write_clipboard = write_clipboard
        self._busy = threading.Lock()

    def _format(self, text: str, format_text: bool | None) -> str | None:
        if format_text is False:
            return None
        if format_text is None:
            result = self.formatter.format_prompt(text)
        else:
            result = self.formatter.reformat_text(text)
        if result.skipped:
            return None
        if not result.success:
            logger.warning("Formatting failed, using original text: %s", result.error)
            return None
        return result.formatted

    def _paste(self, text: str, mode: str) -> tuple[str, PasteResult | None]:
        if mode == "terminal":
            result = self.terminal.dispatch_to_most_recent_terminal(text)
            return paste_status(result), result

        if mode == "auto":
            tracker = self.terminal.focus_tracker
            captured = tracker.captured
            tracker.clear_captured()
            # Captured at dictation start, else the terminal the sampler saw last
            app_id = captured.app_id if captured and captured.app_id else tracker.most_recent()
            if app_id:
                result = self.terminal.dispatch_to_app(text, app_id)
                return paste_status(result), result
            logger.info("No focused app known to paste into, copying to clipboard instead")

        if self._write_clipboard(text):
            return "copied", None
        return "error", None

    def format_and_paste(self, text: str, mode: str | None = None,
                         format_text: bool | None = None) -> PipelineResult:
        """Optionally format text, then deliver it using the paste mode.

        ``format_text`` None follows the formatting setting, True forces a
        reformat, False skips it. A second call while one is running returns
        status ``busy`` without doing anything.
        """
        if not text or not text.strip():
            return PipelineResult("error", text, text, error="Empty text")

        if not self._busy.acquire(blocking=False):
            logger.info("Paste already in progress, skipping")
            return PipelineResult("busy", text, text)

        try:
            mode = mode or get_paste_mode()
            formatted = self._format(text, format_text)
            to_paste = formatted or text
            status, paste = self._paste(to_paste, mode)
            logger.info("📋 Dictation delivered (mode=%s, status=%s)", mode, status)
            return PipelineResult(status, text, to_paste, formatted, paste)
        except Exception as e:
            logger.error("Format/paste error: %s", e)
            return PipelineResult("error", text, text, error=str(e))
        finally:
            self._busy.release()
