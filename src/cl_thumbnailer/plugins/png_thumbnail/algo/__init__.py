"""Format resolution, signature matching and resize algorithms."""

from .format_resolver import FormatResolver, ResolvedImage, ResolveStage
from .quality_resize import ResizeStep, quality_resize
from .signature import identify_format

__all__ = [
    "FormatResolver",
    "ResolvedImage",
    "ResolveStage",
    "ResizeStep",
    "identify_format",
    "quality_resize",
]
