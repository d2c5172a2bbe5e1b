from abc import ABC, abstractmethod

from talentmatch.pdf.models import PageRuns


class BasePdfLayoutReader(ABC):
    """Contract for all PDF layout reader adapters."""

    name: str

    @abstractmethod
    def read_pages(self, pdf_bytes: bytes) -> list[PageRuns]:
        """Read positioned text runs from every page.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One list of TextRun per page, in document order. Pages without a
            text layer yield an empty list.

        Raises:
            PdfExtractionError: if the document structure cannot be parsed.
        """
