"""Canonical in-memory representation of an uploaded resume."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..errors import DocumentInvariantError
from .formats import DocumentFormat


@dataclass(frozen=True)
class DocumentContent:
    """An uploaded artifact: editable text plus the original bytes.

    ``html`` is only carried by rich documents and ``page_count`` only by
    PDFs. Edits never touch ``buffer``; use :meth:`with_content` to layer
    new text over the same original artifact.
    """

    content: str
    format: DocumentFormat
    buffer: Optional[bytes] = None
    html: Optional[str] = None
    original_format: bool = True
    page_count: Optional[int] = None

    def __post_init__(self) -> None:
        fmt = DocumentFormat(self.format)
        object.__setattr__(self, "format", fmt)

        if self.buffer is None:
            raise DocumentInvariantError("buffer is required for an extracted document")
        if (self.html is not None) != (fmt is DocumentFormat.RICH_DOC):
            raise DocumentInvariantError(f"html must be set if and only if format is richDoc (got {fmt.value})")
        if (self.page_count is not None) != (fmt is DocumentFormat.PDF):
            raise DocumentInvariantError(f"page_count must be set if and only if format is pdf (got {fmt.value})")
        if self.page_count is not None and self.page_count < 0:
            raise DocumentInvariantError(f"page_count must be non-negative, got {self.page_count}")

    @classmethod
    def plain(cls, text: str) -> "DocumentContent":
        return cls(content=text, format=DocumentFormat.PLAIN, buffer=text.encode("utf-8"))

    @classmethod
    def rich_doc(cls, html: str, buffer: bytes) -> "DocumentContent":
        return cls(content=html, format=DocumentFormat.RICH_DOC, buffer=buffer, html=html)

    @classmethod
    def pdf(cls, text: str, buffer: bytes, page_count: int) -> "DocumentContent":
        return cls(content=text, format=DocumentFormat.PDF, buffer=buffer, page_count=page_count)

    def with_content(self, content: str) -> "DocumentContent":
        """Return a copy carrying new text over the same buffer and format."""
        return replace(self, content=content)
