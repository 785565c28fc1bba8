"""Locate and replace named sections inside free-form resume text.

Resumes have no enforced schema, so section boundaries come from a line
heuristic rather than parsing:

* a section starts at the first line beginning with its name
  (case-insensitive);
* the line right after the header always belongs to the body;
* the body then runs until the next line that looks like a new header
  (see :func:`is_section_boundary`) or the end of the text.

Nothing here raises. A missing section is an empty result, never an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .formats import Section

#: A line opening with a capital letter is treated as the next header.
SECTION_BOUNDARY = re.compile(r"^[A-Z]")

SectionName = Union[Section, str]


@dataclass(frozen=True)
class SectionSpan:
    """Line indices of a located section.

    ``body_start:body_end`` is the half-open slice of body lines;
    ``body_end`` is the index of the terminating header, or ``len(lines)``.
    """

    header: int
    body_start: int
    body_end: int


def is_section_boundary(line: str) -> bool:
    return bool(SECTION_BOUNDARY.match(line))


def _name(section: SectionName) -> str:
    if isinstance(section, Section):
        return section.value
    return str(section).strip()


def _is_whole_document(name: str) -> bool:
    return name.lower() == Section.ALL.value


def find_section_span(lines: Sequence[str], section: SectionName) -> Optional[SectionSpan]:
    """Find the first header line for *section* and the extent of its body."""
    needle = _name(section).lower()
    if not needle:
        return None

    for index, line in enumerate(lines):
        if not line.lower().startswith(needle):
            continue
        if index + 1 >= len(lines):
            # A header on the last line has no body to capture.
            return None
        end = index + 2
        while end < len(lines) and not is_section_boundary(lines[end]):
            end += 1
        return SectionSpan(header=index, body_start=index + 1, body_end=end)

    return None


def locate_section(content: str, section: SectionName) -> str:
    """Return the trimmed body of *section*, or ``""`` when it is absent."""
    name = _name(section)
    if _is_whole_document(name):
        return content.strip()

    lines = content.split("\n")
    span = find_section_span(lines, name)
    if span is None:
        return ""
    return "\n".join(lines[span.body_start:span.body_end]).strip()


def replace_section(content: str, section: SectionName, new_body: str) -> str:
    """Swap the body of *section* for *new_body*, keeping everything around it.

    Returns *content* unchanged when the section does not occur.
    """
    name = _name(section)
    if _is_whole_document(name):
        return new_body

    lines = content.split("\n")
    span = find_section_span(lines, name)
    if span is None:
        return content

    before = "\n".join(lines[:span.body_start])
    updated = f"{before}\n{new_body}"
    if span.body_end < len(lines):
        updated += "\n" + "\n".join(lines[span.body_end:])
    return updated


def list_sections(content: str) -> List[Section]:
    """Targetable sections present in *content*, in enumeration order."""
    lines = content.split("\n")
    return [
        section
        for section in Section
        if section is not Section.ALL and find_section_span(lines, section) is not None
    ]
