from talentmatch.config.settings import Settings
from talentmatch.pdf.base import BasePdfLayoutReader
from talentmatch.pdf.pdfplumber_adapter import PdfPlumberAdapter
from talentmatch.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfLayoutReaderFactory:
    """Creates the PDF layout reader selected in settings."""

    ADAPTERS: dict[str, type[BasePdfLayoutReader]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfLayoutReader:
        engine = settings.structured_parser_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
