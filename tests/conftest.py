"""Global pytest fixtures for a deterministic test environment."""

from __future__ import annotations

import io
import logging

import pytest
from docx import Document

from resume_tailor.domain.formats import Section
from resume_tailor.observability import LOGGER_NAME
from resume_tailor.pdf_client import PdfExtraction


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "OPENAI_API_KEY",
        "RESUME_TAILOR_API_BASE",
        "RESUME_TAILOR_MODEL",
        "RESUME_TAILOR_PDF_SERVICE_URL",
        "RESUME_TAILOR_MAX_UPLOAD_BYTES",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI installs so they don't outlive captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class StubPdfExtractor:
    """Returns a canned extraction and records what it was sent."""

    def __init__(self, text: str = "Extracted text", page_count: int = 1, error: Exception | None = None):
        self.text = text
        self.page_count = page_count
        self.error = error
        self.calls: list[bytes] = []

    async def extract(self, data: bytes) -> PdfExtraction:
        self.calls.append(data)
        if self.error is not None:
            raise self.error
        return PdfExtraction(text=self.text, page_count=self.page_count)


class StubTransform:
    """Text transform that returns a fixed reply and records requests."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str, Section, bool]] = []

    async def transform(self, resume_content, job_description, section, preserve_format) -> str:
        self.calls.append((resume_content, job_description, section, preserve_format))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def stub_pdf() -> StubPdfExtractor:
    return StubPdfExtractor(text="SUMMARY\nPDF resume\n", page_count=2)


@pytest.fixture
def docx_bytes() -> bytes:
    doc = Document()
    doc.add_heading("Jane Smith", level=1)
    doc.add_heading("Summary", level=2)
    para = doc.add_paragraph("Backend engineer with ")
    para.add_run("8 years").bold = True
    para.add_run(" of experience & more.")
    doc.add_paragraph("Python", style="List Bullet")
    doc.add_paragraph("FastAPI", style="List Bullet")
    doc.add_paragraph("")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Acme"
    table.rows[0].cells[1].text = "2020-2024"
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_pdf_extractor():
    return StubPdfExtractor


@pytest.fixture
def make_transform():
    return StubTransform
