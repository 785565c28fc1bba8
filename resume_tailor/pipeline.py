"""Upload → tailor → merge → download orchestration.

The pipeline holds no document state: every call receives the document the
caller currently holds and returns a new one, so each user action is an
independent request.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .domain.document import DocumentContent
from .domain.formats import Section
from .domain.sections import find_section_span, replace_section
from .extractor import ContentExtractor
from .errors import PipelineError
from .reconciler import DownloadArtifact, reconcile_output
from .tailor import TextTransform

logger = logging.getLogger(__name__)


class ResumePipeline:
    """Sequences extraction, the external tailoring step and reconciliation."""

    def __init__(self, extractor: ContentExtractor, transform: Optional[TextTransform] = None) -> None:
        self.extractor = extractor
        self.transform = transform

    async def upload(self, filename: Optional[str], data: bytes) -> DocumentContent:
        return await self.extractor.extract_file(filename, data)

    async def tailor(
        self,
        document: DocumentContent,
        job_description: str,
        section: Union[Section, str] = Section.ALL,
        preserve_format: bool = True,
    ) -> DocumentContent:
        """Run the text transform and fold its output back into *document*."""
        if self.transform is None:
            raise PipelineError("ResumePipeline was created without a tailoring client")

        section = Section.parse(section)
        tailored = await self.transform.transform(document.content, job_description, section, preserve_format)
        return self.merge(document, section, tailored)

    def merge(
        self,
        document: DocumentContent,
        section: Union[Section, str],
        tailored: str,
    ) -> DocumentContent:
        """Apply tailored text: wholesale for ``all``, else as the section body."""
        section = Section.parse(section)
        if section is Section.ALL:
            return document.with_content(tailored)

        if find_section_span(document.content.split("\n"), section) is None:
            logger.warning(
                "Section %r not found in %s document; content left unchanged",
                section.value,
                document.format.value,
            )
            return document

        return document.with_content(replace_section(document.content, section, tailored))

    def download(self, document: DocumentContent, preserve_format: bool = False) -> DownloadArtifact:
        return reconcile_output(document.content, document.format, document.buffer, preserve_format)
