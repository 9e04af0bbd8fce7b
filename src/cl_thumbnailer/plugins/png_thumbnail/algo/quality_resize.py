"""Multi-step, sharpened downscaling onto a fixed transparent canvas."""

import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from loguru import logger
from numpy.typing import NDArray
from PIL import Image

from ....common.errors import InvalidArgumentError
from ....common.schemas import ResizeSettings


@dataclass(frozen=True)
class ResizeStep:
    width: int
    height: int
    sharpen: bool = False


StepObserver = Callable[[ResizeStep], None]


def _log_step(step: ResizeStep) -> None:
    logger.debug(f"Resize step: {step.width}x{step.height} (sharpen={step.sharpen})")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def content_size(
    original_width: int,
    original_height: int,
    target_width: int,
    target_height: int,
    preserve_ratio: bool,
) -> tuple[int, int]:
    """Size of the scaled content drawn on the target canvas."""
    if not preserve_ratio:
        return target_width, target_height

    ratio = min(target_width / original_width, target_height / original_height)
    width = min(target_width, max(1, _round_half_up(original_width * ratio)))
    height = min(target_height, max(1, _round_half_up(original_height * ratio)))
    return width, height


def needs_multi_step(
    original_width: int,
    original_height: int,
    width: int,
    height: int,
    settings: ResizeSettings,
) -> bool:
    threshold = settings.multi_step_threshold
    return original_width > width * threshold or original_height > height * threshold


def plan_resize_steps(
    original_width: int,
    original_height: int,
    width: int,
    height: int,
    settings: ResizeSettings,
) -> list[ResizeStep]:
    """
    Intermediate sizes for a multi-step downscale.

    Each step shrinks by roughly `settings.step_factor` along both axes.
    The last step always lands exactly on (width, height) and is the only
    one that is not sharpened.
    """
    min_ratio = min(width / original_width, height / original_height)
    num_steps = math.ceil(math.log(min_ratio) / math.log(settings.step_factor))
    num_steps = max(settings.min_steps, num_steps)

    steps: list[ResizeStep] = []
    for i in range(1, num_steps):
        step_ratio = min_ratio ** (i / num_steps)
        steps.append(
            ResizeStep(
                width=max(1, int(original_width * step_ratio)),
                height=max(1, int(original_height * step_ratio)),
                sharpen=True,
            )
        )
    steps.append(ResizeStep(width=width, height=height, sharpen=False))
    return steps


def sharpen(image: Image.Image, settings: ResizeSettings | None = None) -> Image.Image:
    """
    Apply the 3x3 cross-shaped sharpening kernel to every channel.

    The outermost one-pixel ring is copied through unchanged.
    """
    settings = settings or ResizeSettings()
    if image.width < 3 or image.height < 3:
        return image.copy()

    pixels: NDArray[np.float32] = np.asarray(image.convert("RGBA"), dtype=np.float32)
    result = pixels.copy()
    result[1:-1, 1:-1] = settings.sharpen_center * pixels[1:-1, 1:-1] + settings.sharpen_edge * (
        pixels[:-2, 1:-1] + pixels[2:, 1:-1] + pixels[1:-1, :-2] + pixels[1:-1, 2:]
    )

    clipped = np.clip(np.rint(result), 0, 255).astype(np.uint8)
    return Image.fromarray(clipped)


def _resample(image: Image.Image, width: int, height: int) -> Image.Image:
    return image.resize((width, height), Image.Resampling.BICUBIC)


def quality_resize(
    raster: Image.Image,
    target_width: int,
    target_height: int,
    preserve_ratio: bool = True,
    settings: ResizeSettings | None = None,
    on_step: StepObserver | None = None,
) -> Image.Image:
    """
    Resize a raster onto a transparent canvas of exactly the target size.

    Args:
        raster: Decoded source image
        target_width: Canvas width
        target_height: Canvas height
        preserve_ratio: Scale uniformly and center; stretch when False
        settings: Resize constants (defaults when None)
        on_step: Called with every planned step; logs at debug level by default

    Returns:
        RGBA image of size (target_width, target_height)

    Raises:
        InvalidArgumentError: If the raster or the target has a zero dimension
    """
    settings = settings or ResizeSettings()
    observer = on_step or _log_step

    if target_width <= 0 or target_height <= 0:
        raise InvalidArgumentError(
            f"Target size must be positive, got {target_width}x{target_height}"
        )
    original_width, original_height = raster.size
    if original_width <= 0 or original_height <= 0:
        raise InvalidArgumentError(f"Source image has no pixels: {original_width}x{original_height}")

    source = raster if raster.mode == "RGBA" else raster.convert("RGBA")
    width, height = content_size(
        original_width, original_height, target_width, target_height, preserve_ratio
    )

    if needs_multi_step(original_width, original_height, width, height, settings):
        steps = plan_resize_steps(original_width, original_height, width, height, settings)
        logger.debug(
            f"Multi-step resize {original_width}x{original_height} -> "
            + f"{width}x{height} in {len(steps)} steps"
        )
        content = source
        for step in steps:
            observer(step)
            content = _resample(content, step.width, step.height)
            if step.sharpen:
                content = sharpen(content, settings)
    else:
        step = ResizeStep(width=width, height=height)
        observer(step)
        content = _resample(source, width, height)

    canvas = Image.new("RGBA", (target_width, target_height), (0, 0, 0, 0))
    offset = ((target_width - width) // 2, (target_height - height) // 2)
    canvas.paste(content, offset)
    return canvas
