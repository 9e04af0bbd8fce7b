"""PNG thumbnail plugin."""

from .task import ThumbnailConverter, build_params, convert

__all__ = ["ThumbnailConverter", "build_params", "convert"]
