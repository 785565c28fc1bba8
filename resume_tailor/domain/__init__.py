"""Pure domain logic: formats, the document model and section editing."""

from .document import DocumentContent
from .formats import (
    AVAILABLE_FONTS,
    MIME_TYPES,
    DocumentFormat,
    Section,
    detect_format,
    mime_type_for,
)
from .sections import (
    SectionSpan,
    find_section_span,
    is_section_boundary,
    list_sections,
    locate_section,
    replace_section,
)

__all__ = [
    "AVAILABLE_FONTS",
    "MIME_TYPES",
    "DocumentContent",
    "DocumentFormat",
    "Section",
    "SectionSpan",
    "detect_format",
    "find_section_span",
    "is_section_boundary",
    "list_sections",
    "locate_section",
    "mime_type_for",
    "replace_section",
]
