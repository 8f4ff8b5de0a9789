"""
Storage abstraction for uploaded images: local filesystem and in-memory testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from blog_backend.errors import StorageError


class StorageClient(Protocol):
    """Defines the operations the upload routes need from file storage."""

    def save(self, name: str, data: bytes) -> None:
        ...

    def get_bytes(self, name: str) -> bytes:
        ...


def _check_name(name: str) -> str:
    # Flat namespace: anything that is not a bare file name cannot exist.
    if not name or name in (".", "..") or Path(name).name != name:
        raise FileNotFoundError(name)
    return name


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    stored_objects: dict = None

    def __post_init__(self):
        if self.stored_objects is None:
            self.stored_objects = {}

    def save(self, name: str, data: bytes) -> None:
        self.stored_objects[_check_name(name)] = bytes(data)

    def get_bytes(self, name: str) -> bytes:
        stored = self.stored_objects.get(_check_name(name))
        if stored is None:
            raise FileNotFoundError(name)
        return stored


@dataclass
class LocalStorageClient:
    """
    Stores uploads as files in a single directory, created on construction.
    """

    root: str

    def __post_init__(self):
        self.path = Path(self.root).resolve()
        self.path.mkdir(parents=True, exist_ok=True)

    def save(self, name: str, data: bytes) -> None:
        target = self.path / _check_name(name)
        try:
            # "x" refuses to overwrite an existing upload.
            with open(target, "xb") as f:
                f.write(data)
        except OSError as exc:
            raise StorageError(f"Could not write {name}: {exc}") from exc

    def get_bytes(self, name: str) -> bytes:
        target = self.path / _check_name(name)
        try:
            return target.read_bytes()
        except FileNotFoundError:
            raise
        except IsADirectoryError as exc:
            raise FileNotFoundError(name) from exc
        except OSError as exc:
            raise StorageError(f"Could not read {name}: {exc}") from exc
