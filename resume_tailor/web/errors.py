"""Error envelope for the extraction service.

Every failure answers ``{"error": {"code", "message", "details"}}``; the HTTP
status is derived from the code so the two can never disagree.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import ExtractionError

ERROR_STATUS = {
    "BAD_REQUEST": 400,
    "NO_FILE": 400,
    "EMPTY_FILE": 400,
    "PDF_TOO_LARGE": 413,
    "NOT_A_PDF": 415,
    "EXTRACTION_FAILED": 422,
}


def error_response(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS[code],
        content={"error": {"code": code, "message": message, "details": details or {}}},
    )


class UploadRejected(Exception):
    """The request carried no file the PDF reader should be given."""

    def __init__(self, code: str, message: str, **details: Any) -> None:
        if code not in ERROR_STATUS:
            raise ValueError(f"Unknown error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.code]


async def upload_rejected_handler(_: Request, exc: UploadRejected) -> JSONResponse:
    return error_response(exc.code, exc.message, exc.details)


async def extraction_error_handler(_: Request, exc: ExtractionError) -> JSONResponse:
    """A PDF that PyMuPDF cannot read, or that has no text layer."""
    return error_response("EXTRACTION_FAILED", str(exc), {"format": exc.format})


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response("BAD_REQUEST", "Invalid request payload", {"errors": exc.errors()})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UploadRejected, upload_rejected_handler)
    app.add_exception_handler(ExtractionError, extraction_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
