"""Layered format detection and decoding of image bytes.

Real-world files often carry a wrong or missing extension, so the resolver
never trusts the file name. It runs these stages in order and stops at the
first one that yields a raster:

1. signature sniff (records a candidate format, never decodes)
2. naive decode through the codec's content auto-detection
3. forced decode with the decoder for the sniffed format
4. decode temporary copies named with each known extension
5. every decoder that claims the byte stream
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from io import BytesIO
from os import PathLike

from loguru import logger
from PIL import Image

from ....common.codec_registry import CodecRegistry
from ....common.errors import DecodeFailureError
from ....common.file_storage import FileStorage
from ....utils.media_types import PROBE_EXTENSIONS, FormatLabel
from .signature import SIGNATURE_SIZE, identify_format


class ResolveStage(StrEnum):
    NAIVE = "naive"
    FORCED = "forced"
    EXTENSION_PROBE = "extension_probe"
    READER_ENUMERATION = "reader_enumeration"


@dataclass(frozen=True)
class ResolvedImage:
    raster: Image.Image
    stage: ResolveStage
    detected_format: FormatLabel | None = None


class FormatResolver:
    """Decode image bytes of unknown format through a fallback chain."""

    def __init__(
        self,
        registry: CodecRegistry,
        storage: FileStorage,
        probe_extensions: Iterable[str] = PROBE_EXTENSIONS,
    ) -> None:
        self.registry: CodecRegistry = registry
        self.storage: FileStorage = storage
        self.probe_extensions: tuple[str, ...] = tuple(probe_extensions)
        self.supported_formats: frozenset[str] = registry.supported_formats()

    def resolve(self, raw: bytes, file_path: str | PathLike[str]) -> ResolvedImage:
        """
        Decode `raw` into an RGBA raster.

        Args:
            raw: Full content of the input file
            file_path: Where `raw` came from; used for messages only

        Raises:
            DecodeFailureError: If every stage failed
        """
        detected = self.sniff(raw)

        stages: tuple[tuple[ResolveStage, Callable[[], Image.Image | None]], ...] = (
            (ResolveStage.NAIVE, lambda: self.naive_decode(raw)),
            (ResolveStage.FORCED, lambda: self.forced_decode(raw, detected)),
            (ResolveStage.EXTENSION_PROBE, lambda: self.probe_extensions_decode(raw)),
            (ResolveStage.READER_ENUMERATION, lambda: self.enumerate_readers_decode(raw)),
        )

        for stage, attempt in stages:
            raster = attempt()
            if raster is not None:
                logger.info(f"Decoded {file_path} ({stage} stage)")
                return ResolvedImage(raster=raster, stage=stage, detected_format=detected)
            logger.debug(f"{stage} stage could not decode {file_path}")

        raise DecodeFailureError(file_path)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def sniff(self, raw: bytes) -> FormatLabel | None:
        detected = identify_format(raw[:SIGNATURE_SIZE])
        if detected is not None:
            logger.info(f"Identified by file signature as: {detected}")
        return detected

    def naive_decode(self, raw: bytes) -> Image.Image | None:
        return self.registry.decode(BytesIO(raw))

    def forced_decode(self, raw: bytes, detected: FormatLabel | None) -> Image.Image | None:
        if detected is None:
            return None
        pil_format = detected.pil_format
        if pil_format is None or pil_format.lower() not in self.supported_formats:
            logger.debug(f"No decoder available for detected format {detected}")
            return None
        return self.registry.decode_as(pil_format, BytesIO(raw))

    def probe_extensions_decode(self, raw: bytes) -> Image.Image | None:
        for ext in self.probe_extensions:
            try:
                with self.storage.temporary_copy(raw, suffix=f".{ext}") as temp_path:
                    raster = self.registry.decode(temp_path)
            except OSError as exc:
                logger.debug(f"Could not stage temporary .{ext} copy: {exc}")
                continue
            if raster is not None:
                logger.info(f"Read image as {ext}")
                return raster
        return None

    def enumerate_readers_decode(self, raw: bytes) -> Image.Image | None:
        stream = BytesIO(raw)
        for name in self.registry.decoders_for(raw):
            raster = self.registry.decode_as(name, stream)
            if raster is not None:
                logger.info(f"Read image with {name} reader")
                return raster
        return None
