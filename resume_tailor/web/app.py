"""FastAPI app for the PDF text-extraction service."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Optional

import fitz  # PyMuPDF
from fastapi import FastAPI, File, Request, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from ..config import load_config
from ..errors import ExtractionError
from ..pdf_client import PROCESS_PDF_PATH, PdfExtraction
from .errors import UploadRejected, register_error_handlers

logger = logging.getLogger("resume_tailor.web.api")

PDF_MAGIC = b"%PDF-"
PDF_HEADER_WINDOW = 1024


class ProcessPdfResponse(BaseModel):
    """Wire shape consumed by :class:`resume_tailor.pdf_client.HttpPdfExtractor`."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    page_count: int = Field(alias="pageCount")


def extract_pdf_text(data: bytes) -> PdfExtraction:
    """Extract the text of every page with PyMuPDF."""
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise ExtractionError("pdf", f"not a readable PDF: {exc}") from exc

    try:
        text = "\n".join(page.get_text() for page in doc)
        page_count = len(doc)
    finally:
        doc.close()

    if not text.strip():
        raise ExtractionError("pdf", "Failed to extract text from PDF")
    return PdfExtraction(text=text, page_count=page_count)


async def read_pdf_upload(file: UploadFile, max_bytes: int) -> bytes:
    """Read the upload, refusing oversized and non-PDF payloads before parsing."""
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadRejected("PDF_TOO_LARGE", f"PDF exceeds the {max_bytes} byte limit", max_upload_bytes=max_bytes)
    if not data:
        raise UploadRejected("EMPTY_FILE", "Uploaded file is empty")
    # Readers accept a header anywhere in the first KiB.
    if PDF_MAGIC not in data[:PDF_HEADER_WINDOW]:
        raise UploadRejected(
            "NOT_A_PDF",
            "Uploaded file is not a PDF",
            filename=file.filename,
            content_type=file.content_type,
        )
    return data


def create_app(max_upload_bytes: Optional[int] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if max_upload_bytes is None:
        max_upload_bytes = load_config().max_upload_bytes

    app = FastAPI(title="Resume Tailor PDF Service", version="0.1.0")
    app.state.max_upload_bytes = max_upload_bytes

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.url.path,
                status,
                (perf_counter() - start) * 1000,
            )

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {"status": "ok"}

    @app.post(PROCESS_PDF_PATH, response_model=ProcessPdfResponse, response_model_by_alias=True, tags=["extraction"])
    async def process_pdf(file: Optional[UploadFile] = File(None)) -> ProcessPdfResponse:
        if file is None:
            raise UploadRejected("NO_FILE", "No file uploaded")

        data = await read_pdf_upload(file, app.state.max_upload_bytes)
        result = extract_pdf_text(data)
        logger.info("Extracted %d characters from %d page(s)", len(result.text), result.page_count)
        return ProcessPdfResponse(text=result.text, page_count=result.page_count)

    register_error_handlers(app)
    return app


def main() -> None:
    """Run the extraction service."""
    import argparse

    import uvicorn

    from ..observability import configure_logging

    parser = argparse.ArgumentParser(description="Resume Tailor PDF text-extraction service")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request")
    args = parser.parse_args()

    configure_logging(verbose=args.verbose)
    uvicorn.run(create_app(), host=args.host, port=args.port)
