import io

import pdfplumber

from talentmatch.pdf.base import BasePdfLayoutReader
from talentmatch.pdf.exceptions import PdfExtractionError
from talentmatch.pdf.models import PageRuns, TextRun


class PdfPlumberAdapter(BasePdfLayoutReader):
    """Reads word-level text runs using pdfplumber."""

    name = "pdfplumber"

    def read_pages(self, pdf_bytes: bytes) -> list[PageRuns]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [self._page_runs(page) for page in pdf.pages]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber parsing failed: {exc}") from exc

    @staticmethod
    def _page_runs(page: "pdfplumber.page.Page") -> PageRuns:
        height = float(page.height)
        return [
            TextRun(x=float(word["x0"]), y=height - float(word["bottom"]), text=word["text"])
            for word in page.extract_words()
        ]
