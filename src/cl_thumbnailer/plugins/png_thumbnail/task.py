"""PNG thumbnail conversion task."""

import os
from os import PathLike
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from ...common.codec_registry import CapabilityReport, CodecRegistry
from ...common.codec_registry_impl import PillowCodecRegistry
from ...common.errors import EncodeFailureError, InvalidArgumentError, UnsafeOutputPathError
from ...common.file_storage import FileStorage
from ...common.file_storage_impl import LocalFileStorage
from ...common.schemas import (
    DEFAULT_TARGET_SIZE,
    ConverterSettings,
    ConvertOutput,
    ConvertParams,
    OutputPathPolicy,
)
from ...utils.media_types import PROBE_EXTENSIONS
from ...utils.profiling import timed
from .algo.format_resolver import FormatResolver
from .algo.quality_resize import StepObserver, quality_resize

PathArg = str | PathLike[str] | None


def _as_str(path: PathArg) -> object:
    if isinstance(path, PathLike):
        return os.fspath(path)
    return path


def build_params(
    input_path: PathArg,
    output_path: PathArg,
    target_width: int = DEFAULT_TARGET_SIZE,
    target_height: int = DEFAULT_TARGET_SIZE,
    preserve_ratio: bool = True,
) -> ConvertParams:
    """Validate conversion arguments.

    Raises:
        InvalidArgumentError: For missing/empty paths or non-positive sizes
    """
    try:
        return ConvertParams.model_validate(
            {
                "input_path": _as_str(input_path),
                "output_path": _as_str(output_path),
                "target_width": target_width,
                "target_height": target_height,
                "preserve_ratio": preserve_ratio,
            }
        )
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidArgumentError(f"Invalid conversion arguments: {details}") from exc


class ThumbnailConverter:
    """Convert image files of any supported format into PNG thumbnails.

    Collaborators default to the local filesystem and Pillow; pass
    alternatives to run against other storage or codecs.
    """

    def __init__(
        self,
        storage: FileStorage | None = None,
        registry: CodecRegistry | None = None,
        settings: ConverterSettings | None = None,
        on_step: StepObserver | None = None,
    ) -> None:
        self.storage: FileStorage = storage or LocalFileStorage()
        self.registry: CodecRegistry = registry or PillowCodecRegistry()
        self.settings: ConverterSettings = settings or ConverterSettings()
        self.on_step: StepObserver | None = on_step
        self.resolver: FormatResolver = FormatResolver(self.registry, self.storage)

    def report_capabilities(self) -> CapabilityReport:
        return self.registry.report_capabilities(PROBE_EXTENSIONS)

    def convert(
        self,
        input_path: PathArg,
        output_path: PathArg,
        target_width: int = DEFAULT_TARGET_SIZE,
        target_height: int = DEFAULT_TARGET_SIZE,
        preserve_ratio: bool = True,
    ) -> Path:
        params = build_params(
            input_path, output_path, target_width, target_height, preserve_ratio
        )
        return Path(self.run(params).output_path)

    @timed
    def run(self, params: ConvertParams) -> ConvertOutput:
        """
        Decode, resize and write one thumbnail.

        The output file is written only after the PNG has been encoded
        in memory.

        Raises:
            InputNotFoundError: Input missing or not a regular file
            InputEmptyError: Input has zero length
            UnsafeOutputPathError: Output outside the working directory
                under OutputPathPolicy.REJECT
            DecodeFailureError: No decoder could read the input
            EncodeFailureError: PNG could not be produced or written
        """
        input_path = self.storage.check_input(params.input_path)
        output_path = self.storage.resolve_output(params.output_path)
        self._check_output_path(output_path)
        try:
            _ = self.storage.ensure_parent(output_path)
        except OSError as exc:
            raise EncodeFailureError(output_path, str(exc)) from exc

        raw = self.storage.read_bytes(input_path)
        resolved = self.resolver.resolve(raw, input_path)

        thumbnail = quality_resize(
            resolved.raster,
            params.target_width,
            params.target_height,
            params.preserve_ratio,
            settings=self.settings.resize,
            on_step=self.on_step,
        )

        try:
            data = self.registry.encode_png(thumbnail)
        except (OSError, ValueError) as exc:
            raise EncodeFailureError(output_path, str(exc)) from exc
        if not data:
            raise EncodeFailureError(output_path, "encoder produced no data")

        try:
            size = self.storage.write_bytes(output_path, data)
        except OSError as exc:
            raise EncodeFailureError(output_path, str(exc)) from exc

        logger.info(
            f"Wrote {params.target_width}x{params.target_height} thumbnail "
            + f"to {output_path}"
        )

        return ConvertOutput(
            output_path=str(output_path),
            width=thumbnail.width,
            height=thumbnail.height,
            size=size,
            decode_stage=resolved.stage,
            detected_format=resolved.detected_format,
        )

    def _check_output_path(self, output_path: Path) -> None:
        if self.storage.is_within_workdir(output_path):
            return
        if self.settings.output_path_policy == OutputPathPolicy.REJECT:
            raise UnsafeOutputPathError(output_path)
        logger.warning(f"Output path is outside the working directory: {output_path}")


def convert(
    input_path: PathArg,
    output_path: PathArg,
    target_width: int = DEFAULT_TARGET_SIZE,
    target_height: int = DEFAULT_TARGET_SIZE,
    preserve_ratio: bool = True,
) -> Path:
    """Convert `input_path` into a PNG thumbnail at `output_path`.

    Uses the local filesystem and Pillow with default settings.
    """
    return ThumbnailConverter().convert(
        input_path, output_path, target_width, target_height, preserve_ratio
    )
