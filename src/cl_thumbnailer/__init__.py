"""cl_thumbnailer - Convert images of any common format into PNG thumbnails."""

from .common.codec_registry import CapabilityReport, CodecRegistry
from .common.codec_registry_impl import PillowCodecRegistry
from .common.errors import (
    DecodeFailureError,
    EncodeFailureError,
    InputEmptyError,
    InputNotFoundError,
    InvalidArgumentError,
    ThumbnailError,
    UnsafeOutputPathError,
)
from .common.file_storage import FileStorage
from .common.file_storage_impl import LocalFileStorage
from .common.schemas import (
    ConverterSettings,
    ConvertOutput,
    ConvertParams,
    OutputPathPolicy,
    ResizeSettings,
    TargetSpec,
)
from .plugins.png_thumbnail import ThumbnailConverter, convert
from .utils.media_types import FormatLabel

__version__ = "0.1.0"

__all__ = [
    "CapabilityReport",
    "CodecRegistry",
    "ConvertOutput",
    "ConvertParams",
    "ConverterSettings",
    "DecodeFailureError",
    "EncodeFailureError",
    "FileStorage",
    "FormatLabel",
    "InputEmptyError",
    "InputNotFoundError",
    "InvalidArgumentError",
    "LocalFileStorage",
    "OutputPathPolicy",
    "PillowCodecRegistry",
    "ResizeSettings",
    "TargetSpec",
    "ThumbnailConverter",
    "ThumbnailError",
    "UnsafeOutputPathError",
    "__version__",
    "convert",
]
