from unittest.mock import MagicMock

import pytest

from talentmatch.pdf.factory import PdfLayoutReaderFactory
from talentmatch.pdf.pdfplumber_adapter import PdfPlumberAdapter
from talentmatch.pdf.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(engine: str) -> MagicMock:
    settings = MagicMock()
    settings.structured_parser_engine = engine
    return settings


class TestPdfLayoutReaderFactory:
    def test_create_pdfplumber(self) -> None:
        reader = PdfLayoutReaderFactory.create(_make_settings("pdfplumber"))
        assert isinstance(reader, PdfPlumberAdapter)

    def test_create_pymupdf(self) -> None:
        reader = PdfLayoutReaderFactory.create(_make_settings("pymupdf"))
        assert isinstance(reader, PyMuPdfAdapter)

    def test_engine_name_is_case_insensitive(self) -> None:
        reader = PdfLayoutReaderFactory.create(_make_settings("PyMuPDF"))
        assert isinstance(reader, PyMuPdfAdapter)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfLayoutReaderFactory.create(_make_settings("unknown"))
