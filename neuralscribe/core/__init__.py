"""Core module for Neural Scribe."""

from .pipeline import (
    PastePipeline,
    PipelineResult,
    paste_status,
)

__all__ = [
    "PastePipeline",
    "PipelineResult",
    "paste_status",
]
