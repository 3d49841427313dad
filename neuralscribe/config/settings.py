"""Configuration settings for Neural Scribe."""

import json
import logging
import os

from .constants import (
    CONFIG_FILE,
    DEFAULT_FORMATTING_INSTRUCTIONS,
    DEFAULT_FORMATTING_MODEL,
    DEFAULT_PASTE_MODE,
    FOCUS_SAMPLE_INTERVAL,
    FORMATTING_MODELS,
    PASTE_MODES,
)

logger = logging.getLogger("neuralscribe")


def load_config() -> dict:
    """Load configuration from ~/.neuralscribe/config.json if it exists."""
    if CONFIG_FILE.exists():
        try:
            return json.loads(CONFIG_FILE.read_text())
        except Exception as e:
            logger.warning("Failed to load config: %s", e)
    return {}


def get_config(key: str, default=None):
    """Get config value from file, falling back to env var, then default."""
    config = load_config()
    if key in config:
        return config[key]
    env_val = os.getenv(f"NEURALSCRIBE_{key.upper()}")
    if env_val is not None:
        return env_val
    return default


def _as_bool(val, default: bool) -> bool:
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return str(val).strip().lower() in ("1", "true", "yes", "on")


def get_paste_mode() -> str:
    """Get paste mode: 'auto', 'clipboard' or 'terminal'.

    - auto: paste into whichever app was focused before dictation started
    - clipboard: only copy, the user pastes manually
    - terminal (default): paste into the most recently active terminal and press Enter
    """
    val = get_config("paste_mode", DEFAULT_PASTE_MODE)
    if isinstance(val, str) and val.strip().lower() in PASTE_MODES:
        return val.strip().lower()
    logger.warning("Unknown paste_mode %r, using %s", val, DEFAULT_PASTE_MODE)
    return DEFAULT_PASTE_MODE


def get_formatting_enabled() -> bool:
    return _as_bool(get_config("formatting_enabled", "false"), False)


def get_formatting_model() -> str:
    val = get_config("formatting_model", DEFAULT_FORMATTING_MODEL)
    if isinstance(val, str) and val.strip().lower() in FORMATTING_MODELS:
        return val.strip().lower()
    logger.warning("Unknown formatting_model %r, using %s", val, DEFAULT_FORMATTING_MODEL)
    return DEFAULT_FORMATTING_MODEL


def get_formatting_instructions() -> str:
    val = get_config("formatting_instructions")
    if isinstance(val, str) and val.strip():
        return val
    return DEFAULT_FORMATTING_INSTRUCTIONS


def get_focus_sample_interval() -> float:
    """Seconds between frontmost-app samples used to rank terminals by recency."""
    val = get_config("focus_sample_interval", FOCUS_SAMPLE_INTERVAL)
    try:
        interval = float(val)
    except (ValueError, TypeError):
        return FOCUS_SAMPLE_INTERVAL
    return interval if interval > 0 else FOCUS_SAMPLE_INTERVAL
