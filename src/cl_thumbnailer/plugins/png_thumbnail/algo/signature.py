"""Magic-number identification of image encodings."""

from typing import Final

from ....utils.media_types import FormatLabel

# Bytes needed to tell every known format apart (WebP needs the RIFF form type).
SIGNATURE_SIZE: Final[int] = 12

_MIN_PREFIX: Final[int] = 4

# (label, offset -> byte); checked in order, first match wins.
_SIGNATURES: Final[tuple[tuple[FormatLabel, dict[int, int]], ...]] = (
    (FormatLabel.JPEG, {0: 0xFF, 1: 0xD8, 2: 0xFF}),
    (FormatLabel.PNG, {0: 0x89, 1: 0x50, 2: 0x4E, 3: 0x47}),
    (FormatLabel.GIF, {0: 0x47, 1: 0x49, 2: 0x46, 3: 0x38}),
    (FormatLabel.BMP, {0: 0x42, 1: 0x4D}),
    (FormatLabel.TIFF, {0: 0x49, 1: 0x49, 2: 0x2A, 3: 0x00}),
    (FormatLabel.TIFF, {0: 0x4D, 1: 0x4D, 2: 0x00, 3: 0x2A}),
    (
        FormatLabel.WEBP,
        {
            0: 0x52, 1: 0x49, 2: 0x46, 3: 0x46,  # RIFF
            8: 0x57, 9: 0x45, 10: 0x42, 11: 0x50,  # WEBP
        },
    ),
)


def identify_format(prefix: bytes) -> FormatLabel | None:
    """
    Identify an image encoding from the first bytes of a file.

    Args:
        prefix: Leading bytes of the file; only the first
            ``SIGNATURE_SIZE`` are inspected.

    Returns:
        The matching FormatLabel, or None when fewer than 4 bytes are
        given or no signature matches.
    """
    if len(prefix) < _MIN_PREFIX:
        return None

    for label, pattern in _SIGNATURES:
        if all(offset < len(prefix) and prefix[offset] == value for offset, value in pattern.items()):
            return label

    return None
