"""Storage-read capability consumed by the extraction aggregator."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..errors import StorageReadError
from ..schemas import FileRef


@runtime_checkable
class StorageReader(Protocol):
    """Fetches the raw bytes behind a file reference.

    Implementations raise :class:`StorageReadError` when the blob cannot be read.
    """

    async def read(self, ref: FileRef) -> bytes:
        """Return the bytes stored at ``ref.path``."""


class LocalStorageReader:
    """Read attachments from a directory on the local filesystem."""

    def __init__(self, root: str | Path = ".") -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    async def read(self, ref: FileRef) -> bytes:
        target = (self._root / ref.path).resolve()
        if not target.is_relative_to(self._root):
            raise StorageReadError(f"Path escapes storage root: {ref.path}", path=ref.path)
        try:
            return await asyncio.to_thread(target.read_bytes)
        except OSError as exc:
            raise StorageReadError(f"{exc.strerror or exc}: {ref.path}", path=ref.path) from exc


__all__ = ["StorageReader", "LocalStorageReader"]
