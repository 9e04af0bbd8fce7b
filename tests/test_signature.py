"""Unit tests for magic-number format identification.

Covers the signature table, prefix length limits and real files written by PIL.
"""

from pathlib import Path

import pytest

from cl_thumbnailer.plugins.png_thumbnail.algo.signature import SIGNATURE_SIZE, identify_format
from cl_thumbnailer.utils.media_types import FormatLabel

# ============================================================================
# SIGNATURE TABLE TESTS
# ============================================================================


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [
        (b"\xff\xd8\xff\xe0\x00\x10JFIF", FormatLabel.JPEG),
        (b"\x89PNG\r\n\x1a\n", FormatLabel.PNG),
        (b"GIF89a\x01\x00", FormatLabel.GIF),
        (b"GIF87a\x01\x00", FormatLabel.GIF),
        (b"BM\x36\x00\x00\x00", FormatLabel.BMP),
        (b"II*\x00\x08\x00\x00\x00", FormatLabel.TIFF),
        (b"MM\x00*\x00\x00\x00\x08", FormatLabel.TIFF),
        (b"RIFF\x24\x00\x00\x00WEBPVP8 ", FormatLabel.WEBP),
    ],
)
def test_identify_known_signatures(prefix: bytes, expected: FormatLabel):
    """Test each magic number maps to its format label."""
    assert identify_format(prefix) == expected


def test_identify_requires_four_bytes():
    """Test prefixes shorter than 4 bytes are never identified."""
    assert identify_format(b"") is None
    assert identify_format(b"BM") is None
    assert identify_format(b"\xff\xd8\xff") is None


def test_identify_bmp_needs_only_two_matching_bytes():
    """Test BMP matches on its 2-byte magic once 4 bytes are present."""
    assert identify_format(b"BMxx") == FormatLabel.BMP


def test_identify_webp_requires_twelve_bytes():
    """Test a truncated RIFF header is not taken for WebP."""
    assert identify_format(b"RIFF\x24\x00\x00\x00WEB") is None
    assert identify_format(b"RIFF\x24\x00\x00\x00WEBP") == FormatLabel.WEBP


def test_identify_riff_other_than_webp():
    """Test RIFF containers of other kinds are not WebP."""
    assert identify_format(b"RIFF\x24\x00\x00\x00WAVEfmt ") is None


def test_identify_unknown_bytes():
    """Test arbitrary content yields None."""
    assert identify_format(b"This is plain text") is None
    assert identify_format(b"\x00\x00\x00\x00\x00\x00") is None


def test_identify_ignores_bytes_past_signature():
    """Test trailing content does not change the result."""
    assert identify_format(b"\x89PNG" + b"\x00" * 100) == FormatLabel.PNG


def test_signature_size_covers_webp():
    assert SIGNATURE_SIZE == 12


# ============================================================================
# REAL FILE TESTS
# ============================================================================


def test_identify_files_written_by_pil(sample_image: tuple[str, Path]):
    """Test files saved by PIL are identified from their first bytes."""
    label, path = sample_image
    expected = FormatLabel.JPEG if label == "jfif" else FormatLabel(label)

    with path.open("rb") as f:
        prefix = f.read(SIGNATURE_SIZE)

    assert identify_format(prefix) == expected
