import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from talentmatch.extraction.base import (
    ExtractionStrategy,
    budget_deadline,
    variant_timeout,
)
from talentmatch.extraction.exceptions import (
    StrategyExecutionError,
    StrategyTimeoutError,
    UnderlyingToolMissingError,
)
from talentmatch.extraction.models import Failure, Success, VariantResult
from talentmatch.extraction.process import run_tool
from talentmatch.logging.logger import Log


class PdfToTextStrategy(ExtractionStrategy):
    """Extracts text by shelling out to poppler's pdftotext."""

    name: ClassVar[str] = "pdftotext"

    VARIANTS: ClassVar[list[tuple[str, list[str]]]] = [
        ("utf8-layout", ["-enc", "UTF-8", "-layout"]),
        ("layout", ["-layout"]),
        ("raw", ["-raw"]),
        ("default", []),
    ]

    def __init__(
        self,
        executable: str = "pdftotext",
        timeout_seconds: float = 10.0,
        min_chars: int = 20,
    ) -> None:
        self._executable = executable
        self._timeout_seconds = timeout_seconds
        self._min_chars = min_chars

    def attempt(self, pdf_bytes: bytes, time_budget: float | None = None) -> Iterator[VariantResult]:
        deadline = budget_deadline(time_budget)
        with tempfile.TemporaryDirectory(prefix="talentmatch-pdftotext-") as tmp:
            input_path = Path(tmp) / "input.pdf"
            input_path.write_bytes(pdf_bytes)
            for variant, flags in self.VARIANTS:
                output_path = Path(tmp) / f"output-{variant}.txt"
                args = [self._executable, *flags, str(input_path), str(output_path)]
                Log.debug(f"Running {' '.join(args)}")
                try:
                    run_tool(args, variant_timeout(self._timeout_seconds, deadline))
                    text = self._read_output(output_path)
                except UnderlyingToolMissingError as exc:
                    yield VariantResult(variant, Failure(str(exc), type(exc).__name__))
                    return
                except (StrategyTimeoutError, StrategyExecutionError) as exc:
                    Log.warning(f"pdftotext variant '{variant}' failed: {exc}")
                    yield VariantResult(variant, Failure(str(exc), type(exc).__name__))
                    continue
                yield VariantResult(variant, self._classify(text))

    def _classify(self, text: str) -> Success | Failure:
        stripped = text.strip()
        if len(stripped) > self._min_chars:
            return Success(stripped)
        if not stripped:
            return Failure("pdftotext produced no text", "StrategyExecutionError")
        return Failure(
            f"pdftotext produced only {len(stripped)} characters",
            "StrategyExecutionError",
            fallback_text=stripped,
        )

    @staticmethod
    def _read_output(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise StrategyExecutionError(f"pdftotext output unreadable: {exc}") from exc
