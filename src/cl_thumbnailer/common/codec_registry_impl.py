"""Pillow implementation of CodecRegistry."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Final, override

from loguru import logger
from PIL import Image, features

from .codec_registry import CapabilityReport, CodecRegistry, DecodeSource

# Pillow formats whose plugin registers even when the native codec is absent.
_FEATURE_CHECKS: Final[dict[str, str]] = {
    "JPEG": "jpg",
    "WEBP": "webp",
}

# Bytes handed to each plugin's accept() check, as Image.open does.
_PREFIX_SIZE: Final[int] = 16


class PillowCodecRegistry(CodecRegistry):
    """Codec registry backed by the plugins registered with Pillow."""

    def __init__(self) -> None:
        Image.init()

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @override
    def supported_formats(self) -> frozenset[str]:
        return frozenset(fmt.lower() for fmt in Image.OPEN if self._codec_available(fmt))

    @override
    def report_capabilities(self, required: tuple[str, ...]) -> CapabilityReport:
        extensions = {
            ext.lstrip("."): fmt for ext, fmt in sorted(Image.registered_extensions().items())
        }
        available = sorted(self.supported_formats())

        missing: list[str] = []
        for ext in required:
            fmt = extensions.get(ext.lower())
            if fmt is None or fmt.lower() not in available:
                logger.warning(f"Image format may not be supported: {ext}")
                missing.append(ext)

        return CapabilityReport(
            available=available,
            missing=missing,
            extensions={ext: fmt.lower() for ext, fmt in extensions.items()},
        )

    @staticmethod
    def _codec_available(fmt: str) -> bool:
        feature = _FEATURE_CHECKS.get(fmt)
        if feature is None:
            return True
        return bool(features.check(feature))

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @override
    def decode(self, source: DecodeSource) -> Image.Image | None:
        return self._open(source, formats=None)

    @override
    def decode_as(self, format_name: str, source: DecodeSource) -> Image.Image | None:
        fmt = format_name.upper()
        if fmt not in Image.OPEN:
            logger.debug(f"No decoder registered for format {format_name}")
            return None
        return self._open(source, formats=[fmt])

    @override
    def decoders_for(self, data: bytes) -> list[str]:
        prefix = data[:_PREFIX_SIZE]
        names: list[str] = []
        for fmt in Image.ID:
            _, accept = Image.OPEN[fmt]
            try:
                result = not accept or accept(prefix)
            except Exception as exc:
                logger.debug(f"{fmt} accept check failed: {exc}")
                continue
            # A string result means "recognised, but the codec is missing"
            if result and not isinstance(result, str):
                names.append(fmt.lower())
        return names

    def _open(self, source: DecodeSource, formats: list[str] | None) -> Image.Image | None:
        if not isinstance(source, Path):
            _ = source.seek(0)
        try:
            with Image.open(source, formats=formats) as img:
                img.load()
                return img.convert("RGBA")
        except Exception as exc:
            logger.debug(f"Decode attempt failed ({formats or 'auto'}): {exc}")
            return None

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    @override
    def encode_png(self, image: Image.Image) -> bytes:
        buffer = BytesIO()
        image.save(buffer, format="PNG", optimize=True)
        return buffer.getvalue()
