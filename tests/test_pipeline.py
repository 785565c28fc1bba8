"""End-to-end pipeline tests with stub collaborators.

Flow: upload → tailor (stubbed text transform) → merge → download.
"""

import pytest

from resume_tailor.domain.document import DocumentContent
from resume_tailor.domain.formats import DocumentFormat, Section
from resume_tailor.errors import PipelineError, ResumeTailorError, TailoringError
from resume_tailor.extractor import ContentExtractor
from resume_tailor.pipeline import ResumePipeline

SIMPLE = "SUMMARY\nDid X.\nSKILLS\nPython"


def _pipeline(transform=None, pdf=None) -> ResumePipeline:
    return ResumePipeline(ContentExtractor(pdf), transform)


class TestScenarios:

    @pytest.mark.asyncio
    async def test_scoped_summary_merge(self, make_transform):
        transform = make_transform(reply="Did X and Y.")
        pipeline = _pipeline(transform)

        doc = await pipeline.upload("resume.txt", SIMPLE.encode("utf-8"))
        tailored = await pipeline.tailor(doc, "We need Y", "summary", preserve_format=False)

        assert tailored.content == "SUMMARY\nDid X and Y.\nSKILLS\nPython"
        assert transform.calls == [(SIMPLE, "We need Y", Section.SUMMARY, False)]
        assert tailored.buffer == doc.buffer

    @pytest.mark.asyncio
    async def test_pdf_upload_keeps_page_count(self, make_pdf_extractor):
        pipeline = _pipeline(pdf=make_pdf_extractor(text="...", page_count=2))
        doc = await pipeline.upload("resume.pdf", b"%PDF-1.4")

        assert doc.format is DocumentFormat.PDF
        assert doc.page_count == 2

    @pytest.mark.asyncio
    async def test_unknown_extension_is_plain(self):
        doc = await _pipeline().upload("resume.xyz", b"SUMMARY\nhello")
        assert doc.format is DocumentFormat.PLAIN
        assert doc.content == "SUMMARY\nhello"


class TestMerge:

    def test_all_replaces_wholesale(self):
        doc = DocumentContent.pdf(SIMPLE, buffer=b"%PDF", page_count=1)
        merged = _pipeline().merge(doc, Section.ALL, "Completely new resume")

        assert merged.content == "Completely new resume"
        assert merged.format is DocumentFormat.PDF
        assert merged.page_count == 1
        assert merged.buffer == b"%PDF"

    def test_missing_section_leaves_document(self, caplog):
        doc = DocumentContent.plain(SIMPLE)
        with caplog.at_level("WARNING", logger="resume_tailor.pipeline"):
            merged = _pipeline().merge(doc, Section.PROJECTS, "new projects")

        assert merged == doc
        assert "not found" in caplog.text


class TestDownload:

    @pytest.mark.asyncio
    async def test_preserve_format_returns_upload_bytes(self, make_transform, docx_bytes):
        pipeline = _pipeline(make_transform(reply="rewritten everything"))
        doc = await pipeline.upload("resume.docx", docx_bytes)
        tailored = await pipeline.tailor(doc, "jd", Section.ALL, preserve_format=True)

        artifact = pipeline.download(tailored, preserve_format=True)
        assert artifact.data == docx_bytes
        assert artifact.filename == "document.docx"

    @pytest.mark.asyncio
    async def test_plain_export_returns_edited_text(self, make_transform, docx_bytes):
        pipeline = _pipeline(make_transform(reply="rewritten everything"))
        doc = await pipeline.upload("resume.docx", docx_bytes)
        tailored = await pipeline.tailor(doc, "jd", Section.ALL, preserve_format=False)

        artifact = pipeline.download(tailored, preserve_format=False)
        assert artifact.data == b"rewritten everything"
        assert artifact.mime_type == "text/plain"

    @pytest.mark.asyncio
    async def test_empty_upload_downloads_as_empty_file(self):
        pipeline = _pipeline()
        doc = await pipeline.upload("empty.txt", b"")

        artifact = pipeline.download(doc, preserve_format=True)
        assert artifact.data == b""
        assert artifact.filename == "document.txt"


class TestFailures:

    @pytest.mark.asyncio
    async def test_tailoring_error_propagates(self, make_transform):
        pipeline = _pipeline(make_transform(error=TailoringError("model unavailable")))
        doc = await pipeline.upload("resume.txt", SIMPLE.encode())

        with pytest.raises(TailoringError, match="model unavailable"):
            await pipeline.tailor(doc, "jd", Section.SKILLS)

    @pytest.mark.asyncio
    async def test_tailor_requires_transform(self):
        pipeline = _pipeline()
        doc = await pipeline.upload("resume.txt", b"x")
        with pytest.raises(PipelineError, match="without a tailoring client") as exc_info:
            await pipeline.tailor(doc, "jd")
        assert isinstance(exc_info.value, ResumeTailorError)
