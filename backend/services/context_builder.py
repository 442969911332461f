"""Context building from uploaded documents.

Handles:
- Decoding each uploaded document as UTF-8 text
- Filename sanitization
- Concatenating documents, in upload order, under a header per document
- Per-document progress notifications

Decoding runs in worker threads via asyncio.to_thread; documents are decoded
concurrently but always joined in input order.
"""

import asyncio
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from config import get_settings

logger = logging.getLogger(__name__)

DOCUMENT_HEADER = "\n\n--- Document: {name} ---\n\n"

ProgressCallback = Callable[[int, int], None]


class ReadError(Exception):
    """Raised when a document in a batch cannot be read as text."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Error reading file: {filename} ({reason})")


class FileTooLargeError(ReadError):
    """Raised when a document exceeds the size limit."""


@dataclass
class SourceDocument:
    """One uploaded document: its name and raw bytes (or decoded text)."""

    name: str
    content: bytes | str


@dataclass
class BuiltContext:
    """Combined text of a document batch and the names that went into it."""

    text: str
    file_names: list[str] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.file_names)


def sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent path traversal and other issues."""
    filename = Path(filename or "").name
    filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "_", filename)

    max_length = 255
    if len(filename) > max_length:
        name, ext = Path(filename).stem, Path(filename).suffix
        filename = name[: max_length - len(ext)] + ext

    if not filename or filename.startswith("."):
        filename = "document" + Path(filename).suffix

    return filename


def format_document(name: str, text: str) -> str:
    """Render one document block of the combined context."""
    return DOCUMENT_HEADER.format(name=name) + text


class ContextBuilder:
    """Builds a single text context from a batch of documents."""

    def __init__(
        self,
        max_file_size_bytes: int | None = None,
        max_files: int | None = None,
    ) -> None:
        settings = get_settings()
        self.max_file_size_bytes = (
            max_file_size_bytes
            if max_file_size_bytes is not None
            else settings.max_file_size_bytes
        )
        self.max_files = (
            max_files if max_files is not None else settings.max_files_per_upload
        )

    async def build(
        self,
        documents: Sequence[SourceDocument],
        on_progress: ProgressCallback | None = None,
    ) -> BuiltContext:
        """Decode every document and join them into one context.

        Args:
            documents: Documents in the order they should appear.
            on_progress: Optional ``(completed, total)`` callback, invoked once
                per finished document. Calls may arrive out of input order.

        Returns:
            BuiltContext with the combined text and names in input order.

        Raises:
            ValueError: If the batch is empty or has too many files.
            ReadError: If any document cannot be read; nothing is returned.
        """
        if not documents:
            raise ValueError("No documents provided")
        if len(documents) > self.max_files:
            raise ValueError(
                f"Too many files: {len(documents)} (limit {self.max_files})"
            )

        total = len(documents)
        completed = 0

        async def read_one(document: SourceDocument) -> tuple[str, str]:
            nonlocal completed
            name = sanitize_filename(document.name)
            text = await asyncio.to_thread(self._decode, name, document.content)
            completed += 1
            self._notify(on_progress, completed, total)
            return name, text

        # gather keeps results in input order regardless of completion order
        results = await asyncio.gather(
            *(read_one(doc) for doc in documents), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        combined = "".join(format_document(name, text) for name, text in results)
        file_names = [name for name, _ in results]

        logger.info(
            "Built context from %d file(s) (%d chars)", len(file_names), len(combined)
        )
        return BuiltContext(text=combined, file_names=file_names)

    def _decode(self, name: str, content: bytes | str) -> str:
        """Decode document content as UTF-8 text (synchronous)."""
        if isinstance(content, str):
            data_size = len(content.encode("utf-8"))
        else:
            data_size = len(content)

        if data_size > self.max_file_size_bytes:
            raise FileTooLargeError(
                name,
                f"size {data_size} exceeds limit of "
                f"{self.max_file_size_bytes // (1024 * 1024)}MB",
            )

        if isinstance(content, str):
            return content

        try:
            return bytes(content).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.warning("Failed to decode %s: %s", name, e)
            raise ReadError(name, "not valid UTF-8 text") from e
        except (TypeError, ValueError) as e:
            logger.warning("Failed to read %s: %s", name, e)
            raise ReadError(name, str(e)) from e

    @staticmethod
    def _notify(
        on_progress: ProgressCallback | None, completed: int, total: int
    ) -> None:
        if on_progress is None:
            return
        try:
            on_progress(completed, total)
        except Exception as e:
            logger.warning("Progress callback failed: %s", e)
