"""Data types shared by the terminal automation modules."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class TerminalApp:
    """A terminal-like application we know how to target."""

    process_name: str
    app_id: str
    display_name: str

    def to_dict(self) -> dict:
        return {
            "name": self.process_name,
            "appId": self.app_id,
            "displayName": self.display_name,
        }


@dataclass(frozen=True)
class TerminalWindow:
    """An open window of a running terminal app.

    ``window_name`` is the full title used for targeting, ``display_name`` is
    the shortened label for menus.
    """

    app_name: str
    app_id: str
    window_name: str
    window_index: int
    display_name: str

    def to_dict(self) -> dict:
        return {
            "appName": self.app_name,
            "appId": self.app_id,
            "windowName": self.window_name,
            "windowIndex": self.window_index,
            "displayName": self.display_name,
        }


@dataclass(frozen=True)
class FrontmostApp:
    name: str
    app_id: str = ""
    pid: Optional[int] = None


class MatchPolicy(str, Enum):
    EXACT = "exact"
    EXACT_THEN_CONTAINS = "exact-then-contains"


@dataclass(frozen=True)
class PasteRequest:
    """One paste: the text and, optionally, the app and window to put it in.

    No ``app_id`` means "the most recently active terminal".
    """

    text: str
    app_id: Optional[str] = None
    window_name: Optional[str] = None


@dataclass(frozen=True)
class DispatchOptions:
    send_confirm: bool = False
    match_policy: MatchPolicy = MatchPolicy.EXACT


class DispatchOutcome(str, Enum):
    SUCCESS = "success"
    LOCK_REJECTED = "lock-rejected"
    NO_TARGET = "no-target"
    PERMISSION_DENIED = "permission-denied"
    AUTOMATION_FAILED = "automation-failed"


@dataclass
class PasteResult:
    """Outcome of one dispatch.

    ``copied`` is a soft success: the text is on the clipboard even when the
    keystrokes never landed, so the user can paste by hand.
    """

    success: bool
    needs_permission: bool
    copied: bool
    outcome: DispatchOutcome
    target_app: Optional[str] = None

    @classmethod
    def rejected(cls) -> "PasteResult":
        return cls(False, False, False, DispatchOutcome.LOCK_REJECTED)

    def to_dict(self, include_target: bool = False) -> dict:
        data = {
            "success": self.success,
            "needsPermission": self.needs_permission,
            "copied": self.copied,
        }
        if include_target:
            data["targetApp"] = self.target_app
        return data
