"""Exception taxonomy for thumbnail conversion.

Only these errors leave the public conversion call. Failures of individual
decode attempts stay inside the format resolver.
"""

from os import PathLike


class ThumbnailError(Exception):
    """Base class for conversion errors."""


class InvalidArgumentError(ThumbnailError, ValueError):
    def __init__(self, message: str):
        self.message: str = message
        super().__init__(message)


class InputNotFoundError(ThumbnailError, FileNotFoundError):
    def __init__(self, path: str | PathLike[str]):
        self.path: str = str(path)
        super().__init__(f"Input file not found: {self.path}")


class InputEmptyError(ThumbnailError):
    def __init__(self, path: str | PathLike[str]):
        self.path: str = str(path)
        super().__init__(f"Input file is empty: {self.path}")


class DecodeFailureError(ThumbnailError):
    def __init__(self, path: str | PathLike[str]):
        self.path: str = str(path)
        super().__init__(f"unreadable or corrupt image: {self.path}")


class EncodeFailureError(ThumbnailError):
    def __init__(self, path: str | PathLike[str], reason: str | None = None):
        self.path: str = str(path)
        self.reason: str | None = reason
        message = f"Failed to write PNG output: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnsafeOutputPathError(ThumbnailError, PermissionError):
    def __init__(self, path: str | PathLike[str]):
        self.path: str = str(path)
        super().__init__(f"Output path is outside the working directory: {self.path}")
