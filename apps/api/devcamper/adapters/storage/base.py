"""File storage interfaces."""

from abc import ABC, abstractmethod


class FileStoreError(Exception):
    """Raised when an uploaded file cannot be persisted."""


class FileStore(ABC):
    """Stores uploaded binaries under a caller-chosen filename."""

    @abstractmethod
    def save(self, filename: str, content: bytes) -> None:
        """Persist ``content``; an existing file with the same name is replaced."""


__all__ = ["FileStore", "FileStoreError"]
