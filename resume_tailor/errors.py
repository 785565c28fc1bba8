"""Exception types raised by the ingestion, tailoring and download pipeline."""

from __future__ import annotations

from typing import Optional


class ResumeTailorError(Exception):
    """Base class for all resume tailor failures."""


class DocumentInvariantError(ResumeTailorError):
    """A DocumentContent was constructed with inconsistent fields."""


class ExtractionError(ResumeTailorError):
    """Upload failed while turning raw bytes into a DocumentContent."""

    def __init__(self, fmt: str, message: str) -> None:
        super().__init__(f"Failed to read {fmt} file: {message}")
        self.format = fmt
        self.message = message


class PdfServiceError(ExtractionError):
    """The remote text-extraction service rejected or failed the request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__("pdf", message)
        self.status_code = status_code


class TailoringError(ResumeTailorError):
    """The text-transform collaborator failed."""

    def __init__(self, upstream_message: str) -> None:
        super().__init__(f"Failed to tailor resume: {upstream_message}")
        self.upstream_message = upstream_message


class DownloadError(ResumeTailorError):
    """Nothing could be emitted for download."""


class PipelineError(ResumeTailorError):
    """The pipeline was asked to run a step it was not wired for."""
