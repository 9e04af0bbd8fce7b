"""Common module - protocols, schemas, errors and default collaborators."""

from .codec_registry import CapabilityReport, CodecRegistry
from .codec_registry_impl import PillowCodecRegistry
from .file_storage import FileStorage
from .file_storage_impl import LocalFileStorage

__all__ = [
    "CapabilityReport",
    "CodecRegistry",
    "FileStorage",
    "LocalFileStorage",
    "PillowCodecRegistry",
]
