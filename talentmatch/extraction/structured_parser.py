import multiprocessing
import re
from collections.abc import Iterator
from typing import ClassVar
from urllib.parse import unquote

from talentmatch.extraction.base import ExtractionStrategy, budget_deadline, variant_timeout
from talentmatch.extraction.exceptions import (
    NoTextLayerError,
    StrategyExecutionError,
    StrategyTimeoutError,
)
from talentmatch.extraction.models import Failure, Success, VariantResult
from talentmatch.logging.logger import Log
from talentmatch.pdf.base import BasePdfLayoutReader
from talentmatch.pdf.exceptions import PdfExtractionError
from talentmatch.pdf.models import PageRuns, TextRun

LINE_TOLERANCE = 0.5

_ESCAPED_PUNCTUATION: dict[str, str] = {
    "%20": " ",
    "%2C": ",",
    "%2E": ".",
    "%3A": ":",
    "%3B": ";",
    "%28": "(",
    "%29": ")",
    "%2D": "-",
    "%2F": "/",
    "%40": "@",
}
_ESCAPED_RE = re.compile("|".join(_ESCAPED_PUNCTUATION), re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def decode_run(raw: str) -> str:
    """Decode a possibly percent-escaped text run into display text."""
    try:
        decoded = unquote(raw, errors="strict")
    except UnicodeDecodeError:
        decoded = raw
    decoded = _ESCAPED_RE.sub(lambda m: _ESCAPED_PUNCTUATION[m.group(0).upper()], decoded)
    return _WHITESPACE_RE.sub(" ", decoded).strip()


def order_runs(runs: PageRuns, tolerance: float = LINE_TOLERANCE) -> list[list[TextRun]]:
    """Group runs into lines in reading order.

    Runs are sorted top of page first, then left to right. A run whose vertical
    position lies within *tolerance* of the current line's first run joins that
    line; each line is ordered purely by horizontal position.
    """
    lines: list[list[TextRun]] = []
    anchor_y: float | None = None
    for run in sorted(runs, key=lambda r: (-r.y, r.x)):
        if anchor_y is None or anchor_y - run.y > tolerance:
            lines.append([])
            anchor_y = run.y
        lines[-1].append(run)
    return [sorted(line, key=lambda r: r.x) for line in lines]


def render_page(runs: PageRuns, tolerance: float = LINE_TOLERANCE) -> str:
    rendered_lines = []
    for line in order_runs(runs, tolerance):
        words = [text for text in (decode_run(run.text) for run in line) if text]
        if words:
            rendered_lines.append(" ".join(words))
    return "\n".join(rendered_lines)


class StructuredParserStrategy(ExtractionStrategy):
    """Parses the PDF object graph in-process and rebuilds reading order."""

    name: ClassVar[str] = "structured-parser"

    def __init__(
        self,
        reader: BasePdfLayoutReader,
        timeout_seconds: float = 30.0,
        min_chars: int = 20,
    ) -> None:
        self._reader = reader
        self._timeout_seconds = timeout_seconds
        self._min_chars = min_chars

    def attempt(self, pdf_bytes: bytes, time_budget: float | None = None) -> Iterator[VariantResult]:
        variant = self._reader.name
        timeout = variant_timeout(self._timeout_seconds, budget_deadline(time_budget))
        try:
            text = self.extract_text(pdf_bytes, timeout)
        except (StrategyTimeoutError, StrategyExecutionError) as exc:
            Log.warning(f"Structured parser ({variant}) failed: {exc}")
            yield VariantResult(variant, Failure(str(exc), type(exc).__name__))
            return

        if len(text) > self._min_chars:
            yield VariantResult(variant, Success(text))
        else:
            yield VariantResult(
                variant,
                Failure(
                    f"only {len(text)} characters of readable text",
                    "StrategyExecutionError",
                    fallback_text=text,
                ),
            )

    def extract_text(self, pdf_bytes: bytes, timeout: float) -> str:
        """Parse pages and join them in reading order.

        Raises:
            StrategyTimeoutError: parsing did not complete within *timeout*.
            NoTextLayerError: no pages, no text runs, or a structural parse error.
        """
        pages = self._read_with_timeout(pdf_bytes, timeout)
        if not pages or not any(pages):
            raise NoTextLayerError("PDF has no text objects on any page")
        rendered = [render_page(runs) for runs in pages]
        return "\n\n".join(page for page in rendered if page).strip()

    def _read_with_timeout(self, pdf_bytes: bytes, timeout: float) -> list[PageRuns]:
        if timeout <= 0:
            raise StrategyTimeoutError("No time budget left for structured parsing")
        # leaving the pool terminates the worker, so a hung parse never outlives the call
        with multiprocessing.Pool(processes=1) as pool:
            pending = pool.apply_async(self._reader.read_pages, (pdf_bytes,))
            try:
                return pending.get(timeout=timeout)
            except multiprocessing.TimeoutError as exc:
                raise StrategyTimeoutError(
                    f"PDF parsing timed out after {timeout:.1f}s"
                ) from exc
            except PdfExtractionError as exc:
                raise NoTextLayerError(str(exc)) from exc
