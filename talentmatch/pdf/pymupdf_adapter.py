import pymupdf

from talentmatch.pdf.base import BasePdfLayoutReader
from talentmatch.pdf.exceptions import PdfExtractionError
from talentmatch.pdf.models import PageRuns, TextRun


class PyMuPdfAdapter(BasePdfLayoutReader):
    """Reads word-level text runs using PyMuPDF."""

    name = "pymupdf"

    def read_pages(self, pdf_bytes: bytes) -> list[PageRuns]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [self._page_runs(page) for page in doc]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf parsing failed: {exc}") from exc

    @staticmethod
    def _page_runs(page: "pymupdf.Page") -> PageRuns:
        height = float(page.rect.height)
        # words are (x0, y0, x1, y1, text, block_no, line_no, word_no), y from the top
        return [
            TextRun(x=float(word[0]), y=height - float(word[3]), text=str(word[4]))
            for word in page.get_text("words")
        ]
