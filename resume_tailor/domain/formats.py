"""Supported document formats, section names and download MIME types.

Pure lookups only -- no file I/O.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Dict, List, Optional


class DocumentFormat(str, Enum):
    PLAIN = "plain"
    RICH_DOC = "richDoc"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]


class Section(str, Enum):
    """Resume sections that can be targeted. ``ALL`` means the whole document."""

    ALL = "all"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    SKILLS = "skills"

    @classmethod
    def parse(cls, value: "str | Section") -> "Section":
        if isinstance(value, Section):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown section {value!r}. Choose one of: {choices}") from None


_EXTENSIONS: Dict[DocumentFormat, str] = {
    DocumentFormat.PLAIN: "txt",
    DocumentFormat.RICH_DOC: "docx",
    DocumentFormat.PDF: "pdf",
}

#: Lowercased file suffix -> format. Anything else is plain text.
FORMAT_BY_SUFFIX: Dict[str, DocumentFormat] = {
    ".txt": DocumentFormat.PLAIN,
    ".docx": DocumentFormat.RICH_DOC,
    ".pdf": DocumentFormat.PDF,
}

MIME_TYPES: Dict[DocumentFormat, str] = {
    DocumentFormat.PLAIN: "text/plain",
    DocumentFormat.RICH_DOC: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    DocumentFormat.PDF: "application/pdf",
}

DEFAULT_MIME_TYPE = "text/plain"

#: Font choices offered by the UI. Presentation only.
AVAILABLE_FONTS: List[Dict[str, str]] = [
    {"name": "Arial", "value": "arial"},
    {"name": "Times New Roman", "value": "times-new-roman"},
    {"name": "Calibri", "value": "calibri"},
    {"name": "Georgia", "value": "georgia"},
    {"name": "Helvetica", "value": "helvetica"},
]


def detect_format(filename: Optional[str]) -> DocumentFormat:
    """Classify an upload by its extension, defaulting to plain text."""
    if not filename:
        return DocumentFormat.PLAIN
    suffix = PurePath(filename).suffix.lower()
    return FORMAT_BY_SUFFIX.get(suffix, DocumentFormat.PLAIN)


def mime_type_for(fmt: "DocumentFormat | str | None") -> str:
    if fmt is None:
        return DEFAULT_MIME_TYPE
    try:
        fmt = DocumentFormat(fmt)
    except ValueError:
        return DEFAULT_MIME_TYPE
    return MIME_TYPES.get(fmt, DEFAULT_MIME_TYPE)
