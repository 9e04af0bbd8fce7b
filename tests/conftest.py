"""Test configuration and fixtures for cl_thumbnailer.

All sample media is generated with PIL into pytest's tmp_path, so the suite
needs no checked-in images.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger
from PIL import Image, ImageDraw, features

# label -> (file name, PIL save format)
SAMPLE_FORMATS: dict[str, tuple[str, str]] = {
    "jpeg": ("sample.jpg", "JPEG"),
    "png": ("sample.png", "PNG"),
    "gif": ("sample.gif", "GIF"),
    "bmp": ("sample.bmp", "BMP"),
    "tiff": ("sample.tiff", "TIFF"),
    "webp": ("sample.webp", "WEBP"),
    "jfif": ("sample.jfif", "JPEG"),
}

requires_webp = pytest.mark.skipif(
    not features.check("webp"), reason="Pillow built without WebP support"
)

FORMAT_PARAMS = [
    pytest.param(label, marks=requires_webp) if label == "webp" else label
    for label in SAMPLE_FORMATS
]


def make_test_image(width: int = 320, height: int = 240) -> Image.Image:
    """Grid pattern with a filled circle, as an RGB image."""
    img = Image.new("RGB", (width, height), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)

    step = max(4, min(width, height) // 8)
    for i in range(0, width, step):
        draw.line([(i, 0), (i, height)], fill=(255, 255, 255), width=2)
    for i in range(0, height, step):
        draw.line([(0, i), (width, i)], fill=(255, 255, 255), width=2)

    draw.ellipse(
        [width // 4, height // 4, 3 * width // 4, 3 * height // 4],
        fill=(200, 100, 100),
    )
    return img


def write_sample(directory: Path, label: str, width: int = 320, height: int = 240) -> Path:
    file_name, pil_format = SAMPLE_FORMATS[label]
    path = directory / file_name
    make_test_image(width, height).save(path, pil_format)
    return path


# ============================================================================
# Function-Scoped Fixtures
# ============================================================================


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture(params=FORMAT_PARAMS)
def sample_image(request: pytest.FixtureRequest, tmp_path: Path) -> tuple[str, Path]:
    """One sample file per supported format, named with its usual extension."""
    label: str = request.param
    inputs = tmp_path / "inputs"
    inputs.mkdir(exist_ok=True)
    return label, write_sample(inputs, label)


@pytest.fixture
def png_sample(tmp_path: Path) -> Path:
    return write_sample(tmp_path, "png")


@pytest.fixture
def wide_image(tmp_path: Path) -> Path:
    """2000x1000 PNG; large enough to force a multi-step downscale."""
    path = tmp_path / "wide.png"
    make_test_image(2000, 1000).save(path, "PNG")
    return path


@pytest.fixture
def text_as_png(tmp_path: Path) -> Path:
    path = tmp_path / "notes.png"
    _ = path.write_text("This is definitely not an image.\n" * 20)
    return path


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
