"""Public disk facade for user uploads (avatars).

Layout:
  <public_storage_dir>/<relative path>   served at   <public_storage_url>/<relative path>

Only URL and path resolution happen here; uploads and resizing are handled
by whatever process writes into the directory.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import quote

from .config import settings


class StorageError(Exception):
    pass


def _normalize_relative(value: str) -> str:
    raw = (value or "").strip().replace("\\", "/").lstrip("/")
    if not raw:
        raise StorageError("storage path required")
    parts = PurePosixPath(raw).parts
    if any(part == ".." for part in parts):
        raise StorageError(f"storage path must not leave the disk: {value!r}")
    return "/".join(parts)


class PublicDisk:
    """Maps stored relative paths to filesystem paths and public URLs."""

    def __init__(self, root_dir: str | Path | None = None, base_url: str | None = None):
        self.root_dir = Path(root_dir) if root_dir is not None else settings.storage_dir
        self.base_url = (base_url if base_url is not None else settings.public_storage_url).rstrip("/")

    def path_for(self, relative: str) -> Path:
        return self.root_dir / _normalize_relative(relative)

    def exists(self, relative: str) -> bool:
        return self.path_for(relative).is_file()

    def url(self, relative: str) -> str:
        return f"{self.base_url}/{quote(_normalize_relative(relative))}"


def default_disk() -> PublicDisk:
    return PublicDisk()
