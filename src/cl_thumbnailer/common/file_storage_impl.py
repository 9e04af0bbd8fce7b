from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from os import PathLike
from pathlib import Path
from typing import Final, override

from loguru import logger

from .errors import InputEmptyError, InputNotFoundError
from .file_storage import FileStorage


class LocalFileStorage(FileStorage):
    """
    Local filesystem implementation of FileStorage.

    Temporary copies are created in `temp_dir` (system default when None)
    with the prefix ``image_``.
    """

    _TEMP_PREFIX: Final[str] = "image_"

    def __init__(
        self,
        workdir: str | PathLike[str] | None = None,
        temp_dir: str | PathLike[str] | None = None,
    ):
        self._workdir: Path | None = (
            Path(workdir).expanduser().resolve() if workdir is not None else None
        )
        self._temp_dir: str | None = str(temp_dir) if temp_dir is not None else None

    @property
    def workdir(self) -> Path:
        return self._workdir if self._workdir is not None else Path.cwd().resolve()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @override
    def check_input(self, path: str | PathLike[str]) -> Path:
        p = Path(path)
        if not p.is_file():
            raise InputNotFoundError(path)
        if p.stat().st_size == 0:
            raise InputEmptyError(path)
        return p

    @override
    def read_bytes(self, path: str | PathLike[str]) -> bytes:
        return Path(path).read_bytes()

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    @override
    def resolve_output(self, path: str | PathLike[str]) -> Path:
        """
        Absolute, normalised location an output path is written to.
        Relative paths are taken from the working directory.
        """
        return Path(os.path.normpath(self.workdir / path))

    @override
    def ensure_parent(self, path: str | PathLike[str]) -> Path:
        parent = Path(os.path.normpath(path)).parent
        if not parent.exists():
            logger.debug(f"Creating output directory: {parent}")
            parent.mkdir(parents=True, exist_ok=True)
        return parent

    @override
    def write_bytes(self, path: str | PathLike[str], data: bytes) -> int:
        return Path(path).write_bytes(data)

    @override
    @contextmanager
    def temporary_copy(self, data: bytes, suffix: str) -> Iterator[Path]:
        fd, name = tempfile.mkstemp(
            prefix=self._TEMP_PREFIX,
            suffix=suffix,
            dir=self._temp_dir,
        )
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as f:
                _ = f.write(data)
            yield path
        finally:
            path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Path policy
    # ------------------------------------------------------------------

    @override
    def is_within_workdir(self, path: str | PathLike[str]) -> bool:
        """
        True when `path` resolves to the working directory or below it.
        Relative paths are taken relative to the working directory, so
        ``../x`` escapes while ``out/../x`` does not.
        """
        workdir = self.workdir
        normalized = Path(os.path.realpath(workdir / path))
        return normalized == workdir or workdir in normalized.parents
