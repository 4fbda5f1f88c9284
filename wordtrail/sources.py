"""Document content sources."""

from pathlib import Path
from typing import Protocol, runtime_checkable

import aiofiles
import aiofiles.os

from wordtrail.exceptions import ContentReadError
from wordtrail.utils.mixins import LoggerMixin

MARKDOWN_SUFFIXES = frozenset({".md"})


@runtime_checkable
class ContentSource(Protocol):
    """Supplies raw document text by source identifier."""

    async def read(self, source_id: str) -> str: ...

    async def fingerprint(self, source_id: str) -> str | None:
        """A value that changes whenever the document changes, if cheap to get."""
        ...


class FileContentSource(LoggerMixin):
    """Reads markdown documents from a directory (vault)."""

    def __init__(self, root: Path | None = None):
        self.root = Path(root) if root else None

    def resolve(self, source_id: str) -> Path:
        path = Path(source_id)
        if self.root and not path.is_absolute():
            path = self.root / path
        return path

    def is_markdown(self, source_id: str) -> bool:
        return Path(source_id).suffix.lower() in MARKDOWN_SUFFIXES

    async def read(self, source_id: str) -> str:
        if not self.is_markdown(source_id):
            raise ContentReadError(f"Unsupported file type: {source_id}", source_id)

        path = self.resolve(source_id)
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(
                "Failed to read document", source_id=source_id, error=str(e)
            )
            raise ContentReadError(f"Failed to read {path}: {e}", source_id) from e

    async def fingerprint(self, source_id: str) -> str | None:
        try:
            stat = await aiofiles.os.stat(self.resolve(source_id))
        except OSError:
            return None
        return f"{stat.st_mtime_ns}:{stat.st_size}"


class InMemoryContentSource:
    """Documents held in a dict; the fingerprint is a revision counter."""

    def __init__(self, documents: dict[str, str] | None = None):
        self._documents: dict[str, str] = {}
        self._revisions: dict[str, int] = {}
        for source_id, text in (documents or {}).items():
            self.write(source_id, text)

    def write(self, source_id: str, text: str) -> None:
        self._documents[source_id] = text
        self._revisions[source_id] = self._revisions.get(source_id, 0) + 1

    async def read(self, source_id: str) -> str:
        try:
            return self._documents[source_id]
        except KeyError:
            raise ContentReadError(f"Unknown document: {source_id}", source_id) from None

    async def fingerprint(self, source_id: str) -> str | None:
        revision = self._revisions.get(source_id)
        return None if revision is None else str(revision)
