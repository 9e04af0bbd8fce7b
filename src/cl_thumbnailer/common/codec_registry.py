"""
CodecRegistry Protocol - decoders and the PNG encoder used by the converter.

Every decode method returns ``None`` on failure instead of raising, so the
format resolver can compose its fallback stages without catching errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, ClassVar, Protocol, runtime_checkable

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

DecodeSource = BinaryIO | Path


class CapabilityReport(BaseModel):
    """Decoders available in this process, checked against a required set."""

    available: list[str] = Field(
        default_factory=list,
        description="Decoder format names, lowercase",
    )
    missing: list[str] = Field(
        default_factory=list,
        description="Required extensions without a working decoder",
    )
    extensions: dict[str, str] = Field(
        default_factory=dict,
        description="Registered file extension -> decoder format name",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @property
    def is_complete(self) -> bool:
        return not self.missing


@runtime_checkable
class CodecRegistry(Protocol):
    def supported_formats(self) -> frozenset[str]:
        """Lowercase names of every decodable format."""
        ...

    def decode(self, source: DecodeSource) -> Image.Image | None:
        """Decode with content auto-detection; RGBA result or None."""
        ...

    def decode_as(self, format_name: str, source: DecodeSource) -> Image.Image | None:
        """Decode with the decoder registered for `format_name` only."""
        ...

    def decoders_for(self, data: bytes) -> list[str]:
        """Names of all decoders that claim to handle `data`, in priority order."""
        ...

    def encode_png(self, image: Image.Image) -> bytes: ...

    def report_capabilities(self, required: tuple[str, ...]) -> CapabilityReport: ...
