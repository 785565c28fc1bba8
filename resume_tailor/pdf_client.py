"""Client for the remote PDF text-extraction service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from .errors import PdfServiceError

logger = logging.getLogger(__name__)

PROCESS_PDF_PATH = "/api/process-pdf"


@dataclass
class PdfExtraction:
    """Text and page count returned by the extraction service."""
    text: str
    page_count: int


class PdfTextExtractor(Protocol):
    """Anything that can turn PDF bytes into text plus a page count."""

    async def extract(self, data: bytes) -> PdfExtraction: ...


class HttpPdfExtractor:
    """Posts PDF bytes to ``/api/process-pdf`` and reads back the text.

    One request per call, no retries: failures surface to the caller as
    :class:`PdfServiceError`.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def extract(self, data: bytes) -> PdfExtraction:
        url = f"{self.base_url}{PROCESS_PDF_PATH}"
        files = {"file": ("document.pdf", data, "application/pdf")}
        logger.info("Sending %d bytes to PDF service at %s", len(data), url)

        try:
            if self._client is not None:
                response = await self._client.post(url, files=files)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, files=files)
        except httpx.HTTPError as exc:
            raise PdfServiceError(f"PDF service unreachable: {exc}") from exc

        if not response.is_success:
            raise PdfServiceError(
                f"Failed to process PDF file (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise PdfServiceError("PDF service returned invalid JSON", response.status_code) from exc

        return self._parse_payload(payload, response.status_code)

    @staticmethod
    def _parse_payload(payload: Any, status_code: int) -> PdfExtraction:
        if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
            raise PdfServiceError("Failed to extract text from PDF", status_code)

        page_count = payload.get("pageCount", 0)
        if not isinstance(page_count, int) or isinstance(page_count, bool) or page_count < 0:
            raise PdfServiceError(f"Invalid pageCount in response: {page_count!r}", status_code)

        return PdfExtraction(text=payload["text"], page_count=page_count)
