"""Classify automation failures as missing permissions or something else."""

import logging
import platform
from enum import Enum

from neuralscribe.injection.runner import AutomationError, run_osascript

logger = logging.getLogger("neuralscribe")

PLATFORM = platform.system()

# macOS wording and codes for denied Accessibility/Automation access:
# 1002 is "not allowed to send keystrokes", -1743 is errAEEventNotPermitted
PERMISSION_MARKERS = (
    "not allowed to send keystrokes",
    "not allowed assistive access",
    "assistive access",
    "not authorized to send apple events",
    "-1743",
    "1002",
)


class FailureKind(str, Enum):
    PERMISSION_DENIED = "permission-denied"
    OTHER = "other"


def classify(failure_detail) -> FailureKind:
    """Return PERMISSION_DENIED if the failure text matches a denied-access marker."""
    try:
        detail = str(failure_detail or "").lower()
    except Exception:
        return FailureKind.OTHER
    for marker in PERMISSION_MARKERS:
        if marker in detail:
            return FailureKind.PERMISSION_DENIED
    return FailureKind.OTHER


def is_permission_error(failure_detail) -> bool:
    return classify(failure_detail) is FailureKind.PERMISSION_DENIED


def has_accessibility_permission() -> bool:
    """Check whether this process may drive System Events (macOS only).

    Other platforms have no such gate and always report True.
    """
    if PLATFORM != "Darwin":
        return True
    try:
        out = run_osascript('tell application "System Events" to return UI elements enabled')
        return out.lower() == "true"
    except AutomationError as e:
        logger.debug("Accessibility check failed: %s", e)
        return False
