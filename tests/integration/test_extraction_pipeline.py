import shutil
import sys
import time
from collections.abc import Callable
from unittest.mock import patch

import pytest

from talentmatch.config.settings import Settings
from talentmatch.extraction.exceptions import MalformedInputError
from talentmatch.extraction.factory import build_orchestrator
from talentmatch.extraction.orchestrator import DEADLINE_VARIANT

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake tools are POSIX shell scripts")


@pytest.mark.integration
class TestExtractionPipeline:
    def test_text_pdf_without_pdftotext_uses_structured_parser(
        self, make_settings: Callable[..., Settings], resume_pdf_bytes: bytes
    ) -> None:
        result = build_orchestrator(make_settings()).extract(resume_pdf_bytes)

        assert result.succeeded is True
        assert result.text == "John Doe\nSoftware Engineer\nSkills: Python, Go"
        assert [a.strategy_name for a in result.attempts] == ["pdftotext", "structured-parser"]
        assert result.attempts[0].outcome.error_type == "UnderlyingToolMissingError"  # type: ignore[union-attr]
        assert result.source_attempt is not None
        assert result.source_attempt.variant == "pdfplumber"

    def test_pymupdf_engine_joins_pages(
        self, make_settings: Callable[..., Settings], multi_page_pdf_bytes: bytes
    ) -> None:
        settings = make_settings(structured_parser_engine="pymupdf")
        result = build_orchestrator(settings).extract(multi_page_pdf_bytes)

        assert result.succeeded is True
        assert result.text == "Page one content\n\nPage two content"
        assert result.source_attempt is not None
        assert result.source_attempt.variant == "pymupdf"

    @posix_only
    def test_external_tool_output_wins_when_long_enough(
        self,
        make_settings: Callable[..., Settings],
        make_tool: Callable[[str, str], str],
        resume_pdf_bytes: bytes,
    ) -> None:
        tool = make_tool(
            "pdftotext",
            'for last; do :; done\necho "Output from the external extraction tool" > "$last"',
        )
        result = build_orchestrator(make_settings(pdftotext_path=tool)).extract(resume_pdf_bytes)

        assert result.text == "Output from the external extraction tool"
        assert [a.strategy_name for a in result.attempts] == ["pdftotext"]

    def test_hex_strings_recovered_by_byte_scan(
        self, make_settings: Callable[..., Settings], hex_only_pdf_bytes: bytes
    ) -> None:
        result = build_orchestrator(make_settings()).extract(hex_only_pdf_bytes)

        assert result.succeeded is True
        assert "Jane Smith Senior Software Engineer" in result.text
        assert result.source_attempt is not None
        assert result.source_attempt.strategy_name == "raw-byte-patterns"
        assert result.best_score > 10

    def test_image_only_pdf_fails_with_diagnostics(
        self, make_settings: Callable[..., Settings], noise_pdf_bytes: bytes
    ) -> None:
        result = build_orchestrator(make_settings()).extract(noise_pdf_bytes)

        assert result.succeeded is False
        assert result.text == ""
        assert result.error is not None
        message = str(result.error)
        assert message.startswith("Unable to extract text from PDF using multiple methods:")
        assert "1. pdftotext" in message
        assert "2. structured-parser" in message
        assert "3. raw-byte-patterns" in message
        assert "OCR" in result.error.hint

    def test_non_pdf_is_rejected(self, make_settings: Callable[..., Settings]) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            build_orchestrator(make_settings()).extract(b"PK\x03\x04 this is a zip archive")
        assert exc_info.value.header_sample == "PK\x03\x04 thi"

    def test_empty_input_is_rejected(self, make_settings: Callable[..., Settings]) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            build_orchestrator(make_settings()).extract(b"")
        assert exc_info.value.header_sample == ""

    def test_repeated_runs_are_identical(
        self, make_settings: Callable[..., Settings], hex_only_pdf_bytes: bytes
    ) -> None:
        orchestrator = build_orchestrator(make_settings())
        first = orchestrator.extract(hex_only_pdf_bytes)
        second = orchestrator.extract(hex_only_pdf_bytes)
        assert first.text == second.text
        assert first.best_score == second.best_score

    @posix_only
    def test_hung_tool_exhausts_budget_and_skips_the_rest(
        self,
        make_settings: Callable[..., Settings],
        make_tool: Callable[[str, str], str],
        resume_pdf_bytes: bytes,
    ) -> None:
        tool = make_tool("pdftotext", "exec sleep 30")
        settings = make_settings(pdftotext_path=tool, tool_timeout_seconds=0.3)

        started = time.monotonic()
        result = build_orchestrator(settings).extract(resume_pdf_bytes, time_budget=0.8)

        assert time.monotonic() - started < 5
        tool_attempts = [a for a in result.attempts if a.strategy_name == "pdftotext"]
        assert len(tool_attempts) == 4
        assert all(a.outcome.error_type == "StrategyTimeoutError" for a in tool_attempts)  # type: ignore[union-attr]
        skipped = [(a.strategy_name, a.variant) for a in result.attempts if a.variant == DEADLINE_VARIANT]
        assert skipped == [
            ("structured-parser", DEADLINE_VARIANT),
            ("raw-byte-patterns", DEADLINE_VARIANT),
        ]
        assert result.succeeded is False

    def test_ocr_runs_between_parser_and_byte_scan(
        self, make_settings: Callable[..., Settings], empty_pdf_bytes: bytes
    ) -> None:
        settings = make_settings(ocr_enabled=True, ocr_dpi=72)

        with patch(
            "talentmatch.extraction.ocr.pytesseract.image_to_string",
            return_value="Recognized candidate resume text from the scan\n",
        ):
            result = build_orchestrator(settings).extract(empty_pdf_bytes)

        assert result.succeeded is True
        assert result.text == "Recognized candidate resume text from the scan"
        assert [a.strategy_name for a in result.attempts] == ["pdftotext", "structured-parser", "ocr"]


@pytest.mark.integration
@pytest.mark.skipif(shutil.which("pdftotext") is None, reason="pdftotext is not installed")
class TestRealPdfToTextPipeline:
    def test_pdftotext_is_preferred(self, resume_pdf_bytes: bytes) -> None:
        result = build_orchestrator(Settings()).extract(resume_pdf_bytes)
        assert result.succeeded is True
        assert result.source_attempt is not None
        assert result.source_attempt.strategy_name == "pdftotext"
        assert "Software Engineer" in result.text
