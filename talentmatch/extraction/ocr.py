from collections.abc import Iterator
from typing import ClassVar

import pymupdf
import pytesseract
from PIL import Image

from talentmatch.extraction.base import ExtractionStrategy, budget_deadline, variant_timeout
from talentmatch.extraction.exceptions import (
    StrategyExecutionError,
    StrategyTimeoutError,
    UnderlyingToolMissingError,
)
from talentmatch.extraction.models import Failure, Success, VariantResult
from talentmatch.logging.logger import Log


class OcrStrategy(ExtractionStrategy):
    """Rasterizes the first pages with PyMuPDF and recognizes them with tesseract."""

    name: ClassVar[str] = "ocr"

    def __init__(
        self,
        executable: str = "tesseract",
        timeout_seconds: float = 10.0,
        max_pages: int = 3,
        dpi: int = 300,
        language: str = "eng",
        min_chars: int = 20,
    ) -> None:
        self._executable = executable
        self._timeout_seconds = timeout_seconds
        self._max_pages = max_pages
        self._dpi = dpi
        self._language = language
        self._min_chars = min_chars

    def attempt(self, pdf_bytes: bytes, time_budget: float | None = None) -> Iterator[VariantResult]:
        variant = f"tesseract-{self._language}"
        deadline = budget_deadline(time_budget)
        try:
            images = self._render_pages(pdf_bytes)
            texts = [
                self._recognize(image, variant_timeout(self._timeout_seconds, deadline))
                for image in images
            ]
        except (StrategyTimeoutError, StrategyExecutionError) as exc:
            Log.warning(f"OCR failed: {exc}")
            yield VariantResult(variant, Failure(str(exc), type(exc).__name__))
            return

        text = "\n\n".join(t for t in texts if t)
        if len(text) > self._min_chars:
            yield VariantResult(variant, Success(text))
        else:
            yield VariantResult(
                variant,
                Failure(
                    f"OCR recognized only {len(text)} characters",
                    "StrategyExecutionError",
                    fallback_text=text,
                ),
            )

    def _recognize(self, image: Image.Image, timeout: float) -> str:
        """Run tesseract on one page image.

        Raises:
            UnderlyingToolMissingError: the tesseract binary cannot be found.
            StrategyTimeoutError: recognition did not finish within *timeout*.
            StrategyExecutionError: tesseract reported an error.
        """
        # pytesseract treats a zero timeout as "no limit"
        if timeout <= 0:
            raise StrategyTimeoutError("No time budget left for OCR")
        pytesseract.pytesseract.tesseract_cmd = self._executable
        try:
            return pytesseract.image_to_string(image, lang=self._language, timeout=timeout).strip()
        except pytesseract.TesseractNotFoundError as exc:
            raise UnderlyingToolMissingError(f"{self._executable} is not available: {exc}") from exc
        except pytesseract.TesseractError as exc:
            raise StrategyExecutionError(f"tesseract failed: {exc}") from exc
        except RuntimeError as exc:
            raise StrategyTimeoutError(f"OCR timed out after {timeout:.1f}s") from exc

    def _render_pages(self, pdf_bytes: bytes) -> list[Image.Image]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                images = []
                for index, page in enumerate(doc):
                    if index >= self._max_pages:
                        break
                    pix = page.get_pixmap(dpi=self._dpi)
                    images.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))
        except Exception as exc:
            raise StrategyExecutionError(f"Page rendering failed: {exc}") from exc
        if not images:
            raise StrategyExecutionError("PDF has no pages to render")
        return images
