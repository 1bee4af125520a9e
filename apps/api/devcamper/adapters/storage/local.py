"""Local filesystem file store."""

from __future__ import annotations

import logging
from pathlib import Path

from devcamper.adapters.storage.base import FileStore, FileStoreError

logger = logging.getLogger(__name__)


class LocalFileStore(FileStore):
    """Writes uploads into a single directory on the local filesystem."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _target(self, filename: str) -> Path:
        target = (self._root / filename).resolve()
        if target.parent != self._root:
            raise FileStoreError(f"Refusing to write outside the upload directory: {filename!r}")
        return target

    def save(self, filename: str, content: bytes) -> None:
        target = self._target(filename)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.error("upload.write_failed filename=%s error=%s", filename, exc)
            raise FileStoreError("Problem with file upload") from exc
        logger.info("upload.stored filename=%s bytes=%d", filename, len(content))


__all__ = ["LocalFileStore"]
