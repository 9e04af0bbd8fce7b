"""
FileStorage Protocol - filesystem collaborator of the converter.

Design goals:
- Keep every filesystem touch behind one interface
- Support filesystem-bound decoders through temporary copies
- Never leave temporary files behind
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from os import PathLike
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileStorage(Protocol):
    """
    Protocol for the filesystem operations used during a conversion.

    Implementations own:
    - path normalisation
    - temporary file placement and cleanup
    """

    # ---------------------------------------------------------------------
    # Reading
    # ---------------------------------------------------------------------

    def check_input(self, path: str | PathLike[str]) -> Path:
        """
        Validate that `path` is a non-empty regular file.

        Raises:
            InputNotFoundError: missing or not a regular file
            InputEmptyError: zero-length file
        """
        ...

    def read_bytes(self, path: str | PathLike[str]) -> bytes: ...

    # ---------------------------------------------------------------------
    # Writing
    # ---------------------------------------------------------------------

    def resolve_output(self, path: str | PathLike[str]) -> Path:
        """
        Location `path` will be written to.

        The returned path is the one to check, create parents for and
        write; relative paths are anchored at the working directory.
        """
        ...

    def ensure_parent(self, path: str | PathLike[str]) -> Path:
        """Create missing parent directories of `path`."""
        ...

    def write_bytes(self, path: str | PathLike[str], data: bytes) -> int:
        """Write `data` to `path` and return the number of bytes written."""
        ...

    def temporary_copy(
        self, data: bytes, suffix: str
    ) -> AbstractContextManager[Path]:
        """
        Materialise `data` in a uniquely named file carrying `suffix`.

        The file is deleted when the context exits, including on error.
        """
        ...

    # ---------------------------------------------------------------------
    # Path policy
    # ---------------------------------------------------------------------

    def is_within_workdir(self, path: str | PathLike[str]) -> bool: ...
