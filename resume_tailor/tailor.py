"""Text-transform collaborator: rewrite resume text for a job description."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from openai import AsyncOpenAI

from .domain.formats import Section
from .errors import TailoringError

logger = logging.getLogger(__name__)


class TextTransform(Protocol):
    """Returns revised text for the requested scope."""

    async def transform(
        self,
        resume_content: str,
        job_description: str,
        section: Section,
        preserve_format: bool,
    ) -> str: ...


FULL_RESUME_PROMPT = """\
You are an expert resume writer with deep knowledge of various industries. \
Your job is to make resumes highly relevant to job descriptions while keeping \
the candidate's real experience intact.

Instructions:
1. Analyze the resume and the job description: identify the key skills, \
technologies and job expectations.
2. Match the job description against the candidate's experience. Modify and \
enhance the resume based on past projects that align with it instead of adding \
generic points.
3. Reflect every job requirement, either by modifying existing points or by \
adding new relevant ones.
4. When adding points, reference specific projects, technologies or \
achievements already present in the resume.
5. Keep the structure, number of pages and bullet points consistent. Never \
remove a section.
6. Use the wording professionals in the industry would use.
7. Do not duplicate points; refine existing descriptions instead.
8. Add quantifiable achievements wherever possible.
"""

SECTION_PROMPT = """\
You are an expert resume writer. Improve only the "{section}" section of this \
resume based on the job description while keeping the existing format.

Instructions:
1. Extract the skills and qualifications from the job description that are \
relevant to this section.
2. Refine and enhance existing descriptions rather than simply appending points.
3. Any addition must reference past projects that match the job description.
4. Never reduce the number of bullet points.
5. Keep spacing and bullet style consistent.
6. Highlight quantifiable achievements whenever possible.

Return only the body of the "{section}" section, without its heading.
"""

FULL_RESUME_INSTRUCTION = (
    "Modify and optimize this resume to fully align with the job description while "
    "keeping the candidate's actual experience intact."
)
SECTION_INSTRUCTION = (
    'Only modify the "{section}" section. Keep other sections unchanged while making '
    "the necessary updates based on the job description."
)
PRESERVE_FORMAT_INSTRUCTION = "Ensure the formatting, structure, and page count remain unchanged."


def build_messages(
    resume_content: str,
    job_description: str,
    section: Section = Section.ALL,
    preserve_format: bool = True,
) -> List[Dict[str, str]]:
    """Chat messages for one tailoring request."""
    section = Section.parse(section)
    if section is Section.ALL:
        system_prompt = FULL_RESUME_PROMPT
        instruction = FULL_RESUME_INSTRUCTION
    else:
        system_prompt = SECTION_PROMPT.format(section=section.value)
        instruction = SECTION_INSTRUCTION.format(section=section.value)

    user_parts = [
        f"Resume:\n{resume_content}",
        f"Job Description:\n{job_description}",
        f"Enhancement Instructions:\n{instruction}",
    ]
    if preserve_format:
        user_parts.append(PRESERVE_FORMAT_INSTRUCTION)

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": "\n\n".join(user_parts)},
    ]


class OpenAITailor:
    """Tailors resumes through an OpenAI-compatible chat completion API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        api_base: str = "",
        temperature: float = 0.7,
        timeout: float = 60.0,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=api_base or None, timeout=timeout)

    async def transform(
        self,
        resume_content: str,
        job_description: str,
        section: Section = Section.ALL,
        preserve_format: bool = True,
    ) -> str:
        messages = build_messages(resume_content, job_description, section, preserve_format)
        logger.info("Requesting tailoring from %s (section=%s)", self.model, Section.parse(section).value)

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except Exception as exc:
            logger.error("Tailoring request failed: %s", exc)
            raise TailoringError(str(exc)) from exc

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise TailoringError("model returned an empty response")
        return content
