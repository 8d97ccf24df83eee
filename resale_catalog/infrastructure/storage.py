"""Local file storage for uploaded images and generated exports.

Removal is best-effort: callers get a FileCleanup describing what was and
was not removed, and decide whether that matters.
"""

import os
from dataclasses import dataclass, field
from typing import Iterable, List

import structlog

from resale_catalog.config import get_settings

logger = structlog.get_logger(__name__)


@dataclass
class FileCleanup:
    removed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class FileStorage:
    """Flat directory keyed by file name (no sub-directories)."""

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def path_for(self, filename: str) -> str:
        # Only the last path segment is ever used as a key
        return os.path.join(self.base_dir, os.path.basename(filename))

    def ensure_dir(self) -> None:
        os.makedirs(self.base_dir, exist_ok=True)

    def save(self, filename: str, content: bytes) -> str:
        """Write a file, silently replacing any file with the same name."""
        self.ensure_dir()
        path = self.path_for(filename)
        with open(path, "wb") as f:
            f.write(content)
        return path

    def read(self, filename: str) -> bytes:
        with open(self.path_for(filename), "rb") as f:
            return f.read()

    def exists(self, filename: str) -> bool:
        return os.path.isfile(self.path_for(filename))

    def remove_many(self, filenames: Iterable[str]) -> FileCleanup:
        cleanup = FileCleanup()
        for filename in filenames:
            path = self.path_for(filename)
            try:
                os.remove(path)
                cleanup.removed.append(filename)
            except FileNotFoundError:
                # Already gone counts as removed
                cleanup.removed.append(filename)
            except OSError as e:
                logger.warning("File removal failed", filename=filename, error=str(e))
                cleanup.failed.append(filename)
        return cleanup


def get_image_storage() -> FileStorage:
    return FileStorage(get_settings().IMAGES_DIR)


def get_export_storage() -> FileStorage:
    return FileStorage(get_settings().EXPORT_DIR)
