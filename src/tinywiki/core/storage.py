"""Storage abstraction for wiki pages."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from tinywiki.core.errors import (
    InvalidTitleError,
    PageNotFoundError,
    PageSaveError,
    StorageError,
)
from tinywiki.core.models import Page, is_valid_title

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load(self, title: str) -> Page:
        """Load a page by title. Raises PageNotFoundError if missing."""
        ...

    @abstractmethod
    async def save(self, title: str, body: bytes) -> Page:
        """Save a page. Creates it or replaces its body."""
        ...

    @abstractmethod
    async def list_titles(self) -> list[str]:
        """List all page titles."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is one file named ``<title>.txt`` holding the body verbatim.
    There is no locking, no atomic replace and no cache: every call hits
    the filesystem, and concurrent writers to one title race (last write wins).
    """

    SUFFIX = ".txt"
    FILE_MODE = 0o600

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"cannot create data directory {self.base_path}: {exc}"
            ) from exc

    def _title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + self.SUFFIX

    def _filename_to_title(self, filename: str) -> str:
        """Convert filename to page title."""
        return filename.removesuffix(self.SUFFIX)

    def _get_path(self, title: str) -> Path:
        """Get full path for a page, rejecting titles that are not file-safe."""
        if not is_valid_title(title):
            raise InvalidTitleError(title)
        return self.base_path / self._title_to_filename(title)

    async def load(self, title: str) -> Page:
        """Read the full contents of a page file."""
        path = self._get_path(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError as exc:
            raise PageNotFoundError(title) from exc
        except OSError as exc:
            raise StorageError(f"cannot read {path}: {exc}") from exc

        logger.debug("Loaded page %s (%d bytes)", title, len(body))
        return Page(title=title, body=body)

    async def save(self, title: str, body: bytes) -> Page:
        """Write a page file, creating or truncating it."""
        path = self._get_path(title)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(body)
        except OSError as exc:
            raise PageSaveError(f"cannot write {path}: {exc}") from exc

        logger.debug("Saved page %s (%d bytes)", title, len(body))
        return Page(title=title, body=body)

    async def list_titles(self) -> list[str]:
        """List all page titles."""
        titles = []
        for path in self.base_path.glob("*" + self.SUFFIX):
            title = self._filename_to_title(path.name)
            if is_valid_title(title):
                titles.append(title)
        return sorted(titles)
