"""Decide what bytes a download should contain."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .domain.formats import DEFAULT_MIME_TYPE, DocumentFormat, mime_type_for
from .errors import DownloadError

logger = logging.getLogger(__name__)

PLAIN_FILENAME = "document.txt"


@dataclass(frozen=True)
class DownloadArtifact:
    """A downloadable blob."""
    data: bytes
    mime_type: str
    filename: str


def _extension(fmt: Union[DocumentFormat, str, None]) -> str:
    try:
        return DocumentFormat(fmt).extension
    except ValueError:
        return "txt"


def reconcile_output(
    content: Optional[str],
    fmt: Union[DocumentFormat, str, None],
    buffer: Optional[bytes] = None,
    preserve_format: bool = False,
) -> DownloadArtifact:
    """Build the download for the current document state.

    With *preserve_format* and an original *buffer*, the original bytes are
    returned untouched and any textual edits are not part of the download.
    Otherwise the edited text is emitted as plain text.
    """
    if not content and buffer is None:
        raise DownloadError("No content to download")

    if preserve_format and buffer is not None:
        artifact = DownloadArtifact(
            data=bytes(buffer),
            mime_type=mime_type_for(fmt),
            filename=f"document.{_extension(fmt)}",
        )
        logger.info("Re-emitting original %s bytes (%d bytes)", artifact.filename, len(artifact.data))
        return artifact

    data = (content or "").encode("utf-8")
    logger.info("Emitting edited text as %s (%d bytes)", PLAIN_FILENAME, len(data))
    return DownloadArtifact(data=data, mime_type=DEFAULT_MIME_TYPE, filename=PLAIN_FILENAME)
