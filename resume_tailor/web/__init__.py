"""HTTP service exposing PDF text extraction."""

from .app import create_app, extract_pdf_text

__all__ = ["create_app", "extract_pdf_text"]
