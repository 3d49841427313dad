"""Configuration for Neural Scribe."""

from .constants import *  # noqa: F401,F403
from .settings import (
    load_config,
    get_config,
    get_paste_mode,
    get_formatting_enabled,
    get_formatting_model,
    get_formatting_instructions,
    get_focus_sample_interval,
)
