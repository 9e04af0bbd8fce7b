from enum import StrEnum


class FormatLabel(StrEnum):
    """Decode-capability identifier, not a file extension."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    TIFF = "tiff"
    WEBP = "webp"
    JFIF = "jfif"
    UNKNOWN = "unknown"

    @property
    def pil_format(self) -> str | None:
        """Pillow plugin id able to decode this label."""
        if self is FormatLabel.UNKNOWN:
            return None
        # JFIF is a JPEG container
        if self is FormatLabel.JFIF:
            return "JPEG"
        return self.value.upper()


# Extensions tried, in order, when probing decoders that dispatch on file name.
PROBE_EXTENSIONS: tuple[str, ...] = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "bmp",
    "tiff",
    "webp",
    "jfif",
)
