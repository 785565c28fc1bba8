"""Tests for the resume-tailor command line."""

import pytest

from resume_tailor.cli import build_parser, main, run
from resume_tailor.extractor import ContentExtractor
from resume_tailor.pipeline import ResumePipeline

RESUME = "SUMMARY\nDid X.\nSKILLS\nPython"


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "resume.txt").write_text(RESUME, encoding="utf-8")
    (tmp_path / "job.txt").write_text("Looking for Y", encoding="utf-8")
    (tmp_path / "config.yaml").write_text("api_key: sk-test\n", encoding="utf-8")
    return tmp_path


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["resume.pdf", "--job", "jd.txt"])
        assert args.section == "all"
        assert not args.preserve_format
        assert args.output is None

    def test_rejects_unknown_section(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["resume.pdf", "--job", "jd.txt", "--section", "education"])


class TestRun:

    @pytest.mark.asyncio
    async def test_tailors_section_and_writes_text(self, workspace, make_transform):
        out = workspace / "out" / "tailored.txt"
        args = build_parser().parse_args([
            str(workspace / "resume.txt"),
            "--job", str(workspace / "job.txt"),
            "--section", "summary",
            "--output", str(out),
            "--config", str(workspace / "config.yaml"),
            "--quiet",
        ])
        transform = make_transform(reply="Did X and Y.")

        written = await run(args, ResumePipeline(ContentExtractor(), transform))

        assert written == out
        assert out.read_text(encoding="utf-8") == "SUMMARY\nDid X and Y.\nSKILLS\nPython"
        assert transform.calls[0][1] == "Looking for Y"

    @pytest.mark.asyncio
    async def test_preserve_format_writes_original(self, workspace, make_transform):
        out = workspace / "document.txt"
        args = build_parser().parse_args([
            str(workspace / "resume.txt"),
            "--job", str(workspace / "job.txt"),
            "--preserve-format",
            "--output", str(out),
            "--config", str(workspace / "config.yaml"),
        ])

        await run(args, ResumePipeline(ContentExtractor(), make_transform(reply="rewritten")))

        assert out.read_text(encoding="utf-8") == RESUME


class TestMain:

    def test_show_section(self, workspace, capsys):
        code = main([str(workspace / "resume.txt"), "--show-section", "skills", "--quiet"])
        assert code == 0
        assert "Python" in capsys.readouterr().out

    def test_requires_job(self, workspace):
        with pytest.raises(SystemExit):
            main([str(workspace / "resume.txt")])

    def test_missing_api_key_stops_early(self, workspace, tmp_path):
        empty_config = tmp_path / "empty.yaml"
        empty_config.write_text("model: gpt-4o\n", encoding="utf-8")
        code = main([
            str(workspace / "resume.txt"),
            "--job", str(workspace / "job.txt"),
            "--config", str(empty_config),
            "--quiet",
        ])
        assert code == 2

    def test_missing_resume_file(self, workspace):
        code = main([
            str(workspace / "nope.txt"),
            "--show-section", "summary",
            "--config", str(workspace / "config.yaml"),
            "--quiet",
        ])
        assert code == 1
