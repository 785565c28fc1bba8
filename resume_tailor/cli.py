"""CLI - tailor a resume file for a job description from the command line."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from .config import Severity, load_config, validate_config
from .domain.formats import Section
from .domain.sections import list_sections, locate_section
from .errors import ResumeTailorError
from .extractor import ContentExtractor
from .observability import configure_logging
from .pdf_client import HttpPdfExtractor
from .pipeline import ResumePipeline
from .tailor import OpenAITailor

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resume Tailor - align a resume section with a job description"
    )
    parser.add_argument("resume", help="Resume file (.txt, .docx or .pdf)")
    parser.add_argument(
        "--job", "-j",
        help="File containing the job description (required unless --show-section is used)",
    )
    parser.add_argument(
        "--section", "-s",
        default=Section.ALL.value,
        choices=[s.value for s in Section],
        help="Section to tailor (default: all)",
    )
    parser.add_argument(
        "--preserve-format",
        action="store_true",
        help="Download the original file bytes instead of the edited text",
    )
    parser.add_argument("--output", "-o", help="Where to write the download (default: artifact name in cwd)")
    parser.add_argument(
        "--config", "-c",
        default="config/config.local.yaml",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--show-section",
        choices=[s.value for s in Section],
        help="Print a section of the uploaded resume and exit",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet mode (minimal output)")
    return parser


async def run(args: argparse.Namespace, pipeline: Optional[ResumePipeline] = None) -> Path:
    """Upload, tailor and download. Returns the written path."""
    config = load_config(args.config)
    if pipeline is None:
        transform = None
        if not args.show_section:
            transform = OpenAITailor(
                api_key=config.api_key,
                model=config.model,
                api_base=config.api_base,
                temperature=config.temperature,
                timeout=config.request_timeout,
            )
        pipeline = ResumePipeline(
            extractor=ContentExtractor(HttpPdfExtractor(config.pdf_service_url, timeout=config.request_timeout)),
            transform=transform,
        )

    resume_path = Path(args.resume)
    document = await pipeline.upload(resume_path.name, resume_path.read_bytes())
    if not args.quiet:
        found = ", ".join(s.value for s in list_sections(document.content)) or "none"
        console.print(f"Loaded {resume_path.name} as {document.format.value} (sections: {found})", style="dim")

    if args.show_section:
        body = locate_section(document.content, args.show_section)
        console.print(Panel(body or "(section not found)", title=args.show_section))
        return resume_path

    job_description = Path(args.job).read_text(encoding="utf-8")
    tailored = await pipeline.tailor(document, job_description, args.section, args.preserve_format)
    artifact = pipeline.download(tailored, preserve_format=args.preserve_format)

    output = Path(args.output) if args.output else Path.cwd() / artifact.filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(artifact.data)

    if not args.quiet:
        console.print(f"Wrote {output} ({artifact.mime_type}, {len(artifact.data)} bytes)", style="green")
        if args.preserve_format and tailored.content != document.content:
            console.print(
                "Note: --preserve-format re-emits the original file; tailored text is not included.",
                style="yellow",
            )
    return output


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.show_section and not args.job:
        parser.error("--job is required unless --show-section is used")

    configure_logging(verbose=not args.quiet)

    if not args.show_section:
        issues = validate_config(load_config(args.config))
        for issue in issues:
            style = "red" if issue.severity is Severity.ERROR else "yellow"
            console.print(f"{issue.severity.value}: {issue.field}: {issue.message}", style=style)
        if any(issue.severity is Severity.ERROR for issue in issues):
            return 2

    try:
        asyncio.run(run(args))
    except (ResumeTailorError, OSError) as e:
        console.print(f"Error: {e}", style="red")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
