"""Neural Scribe - dictate into your terminal."""

__version__ = "0.3.0"
