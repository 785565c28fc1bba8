"""Turn uploaded resume bytes into a :class:`DocumentContent`.

Plain text and DOCX are handled locally; PDFs go to the extraction service
through an injected :class:`PdfTextExtractor`.
"""

from __future__ import annotations

import html
import io
import logging
import re
from typing import Iterator, List, Optional, Union

from docx import Document
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from .domain.document import DocumentContent
from .domain.formats import DocumentFormat, detect_format
from .errors import ExtractionError, PdfServiceError
from .pdf_client import PdfTextExtractor

logger = logging.getLogger(__name__)

_HEADING_LEVEL = re.compile(r"^Heading\s*(\d)")


class ContentExtractor:
    """Extracts canonical editable text from each supported format."""

    def __init__(self, pdf_extractor: Optional[PdfTextExtractor] = None) -> None:
        self.pdf_extractor = pdf_extractor

    async def extract_file(self, filename: Optional[str], data: bytes) -> DocumentContent:
        """Detect the format from *filename* and extract *data*."""
        return await self.extract(data, detect_format(filename))

    async def extract(self, data: bytes, fmt: Union[DocumentFormat, str]) -> DocumentContent:
        fmt = DocumentFormat(fmt)
        logger.info("Extracting %s document (%d bytes)", fmt.value, len(data))

        try:
            if fmt is DocumentFormat.RICH_DOC:
                document = self._extract_docx(data)
            elif fmt is DocumentFormat.PDF:
                document = await self._extract_pdf(data)
            else:
                document = self._extract_plain(data)
        except ExtractionError:
            logger.exception("Extraction failed for %s document", fmt.value)
            raise
        except Exception as exc:
            logger.exception("Extraction failed for %s document", fmt.value)
            raise ExtractionError(fmt.value, str(exc) or type(exc).__name__) from exc

        logger.info("Extracted %d characters from %s document", len(document.content), fmt.value)
        return document

    def _extract_plain(self, data: bytes) -> DocumentContent:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ExtractionError(DocumentFormat.PLAIN.value, f"text is not valid UTF-8: {exc}") from exc
        return DocumentContent.plain(text)

    def _extract_docx(self, data: bytes) -> DocumentContent:
        rendered = docx_to_html(data)
        return DocumentContent.rich_doc(rendered, buffer=bytes(data))

    async def _extract_pdf(self, data: bytes) -> DocumentContent:
        if self.pdf_extractor is None:
            raise PdfServiceError("no PDF extraction service configured")
        result = await self.pdf_extractor.extract(data)
        return DocumentContent.pdf(result.text, buffer=bytes(data), page_count=result.page_count)


# ---------------------------------------------------------------------------
# DOCX → HTML
# ---------------------------------------------------------------------------


def docx_to_html(data: bytes) -> str:
    """Render a DOCX body as HTML, one block element per line.

    Headings, bullet/numbered lists, bold/italic runs and tables are kept;
    other formatting is dropped. Empty paragraphs are skipped.
    """
    doc = Document(io.BytesIO(data))
    blocks: List[str] = []
    open_list: Optional[str] = None

    for block in _iter_blocks(doc):
        list_tag = _list_tag(block) if isinstance(block, Paragraph) else None

        if open_list and list_tag != open_list:
            blocks.append(f"</{open_list}>")
            open_list = None

        if isinstance(block, Table):
            blocks.append(_render_table(block))
            continue

        inner = _render_runs(block)
        if not inner:
            continue

        if list_tag:
            if open_list is None:
                blocks.append(f"<{list_tag}>")
                open_list = list_tag
            blocks.append(f"<li>{inner}</li>")
        else:
            tag = _block_tag(block)
            blocks.append(f"<{tag}>{inner}</{tag}>")

    if open_list:
        blocks.append(f"</{open_list}>")

    return "\n".join(blocks)


def _iter_blocks(doc) -> Iterator[Union[Paragraph, Table]]:
    for child in doc.element.body.iterchildren():
        if child.tag == qn("w:p"):
            yield Paragraph(child, doc)
        elif child.tag == qn("w:tbl"):
            yield Table(child, doc)


def _style_name(paragraph: Paragraph) -> str:
    style = paragraph.style
    return (style.name if style is not None else "") or ""


def _block_tag(paragraph: Paragraph) -> str:
    name = _style_name(paragraph)
    if name == "Title":
        return "h1"
    match = _HEADING_LEVEL.match(name)
    if match:
        return f"h{min(max(int(match.group(1)), 1), 6)}"
    return "p"


def _list_tag(paragraph: Paragraph) -> Optional[str]:
    name = _style_name(paragraph)
    if name.startswith("List Number"):
        return "ol"
    if name.startswith("List"):
        return "ul"
    return None


def _render_runs(paragraph: Paragraph) -> str:
    parts: List[str] = []
    for run in paragraph.runs:
        if not run.text:
            continue
        text = html.escape(run.text)
        if run.italic:
            text = f"<em>{text}</em>"
        if run.bold:
            text = f"<strong>{text}</strong>"
        parts.append(text)
    rendered = "".join(parts)
    return rendered if rendered.strip() else ""


def _render_table(table: Table) -> str:
    rows: List[str] = []
    for row in table.rows:
        cells = []
        for cell in row.cells:
            paragraphs = [_render_runs(p) for p in cell.paragraphs]
            body = "".join(f"<p>{p}</p>" for p in paragraphs if p)
            cells.append(f"<td>{body}</td>")
        rows.append(f"<tr>{''.join(cells)}</tr>")
    return f"<table>{''.join(rows)}</table>"
