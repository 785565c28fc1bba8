"""Resume Tailor - upload a resume, tailor a section, download it in its original format."""

from .domain import DocumentContent, DocumentFormat, Section, detect_format, locate_section, replace_section
from .errors import (
    DocumentInvariantError,
    DownloadError,
    ExtractionError,
    PdfServiceError,
    PipelineError,
    ResumeTailorError,
    TailoringError,
)
from .extractor import ContentExtractor
from .pipeline import ResumePipeline
from .reconciler import DownloadArtifact, reconcile_output

__version__ = "0.1.0"

__all__ = [
    "ContentExtractor",
    "DocumentContent",
    "DocumentFormat",
    "DocumentInvariantError",
    "DownloadArtifact",
    "DownloadError",
    "ExtractionError",
    "PdfServiceError",
    "PipelineError",
    "ResumePipeline",
    "ResumeTailorError",
    "Section",
    "TailoringError",
    "detect_format",
    "locate_section",
    "reconcile_output",
    "replace_section",
]
