from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from talentmatch.extraction.models import ExtractionAttempt


class ExtractionError(Exception):
    """Base exception for all extraction pipeline errors."""


class MalformedInputError(ExtractionError):
    """Raised when the input does not carry a PDF signature."""

    def __init__(self, header_sample: str) -> None:
        super().__init__(f"Invalid PDF header: {header_sample!r}")
        self.header_sample = header_sample


class StrategyTimeoutError(ExtractionError):
    """Raised when a single strategy variant exceeds its time budget."""


class StrategyExecutionError(ExtractionError):
    """Raised when a strategy variant fails while running."""


class UnderlyingToolMissingError(StrategyExecutionError):
    """Raised when an external extraction tool cannot be invoked."""


class NoTextLayerError(StrategyExecutionError):
    """Raised when a PDF has no readable page/text-object structure."""


class NoExtractableTextError(ExtractionError):
    """Terminal failure: no strategy produced acceptable text.

    Carried on the ExtractionResult rather than raised, together with the
    attempt log and a remediation hint for the caller.
    """

    HINT = (
        "The document may be image-based (scanned) or use custom font encoding; "
        "it likely requires optical character recognition (OCR) to extract text."
    )

    def __init__(self, attempts: Sequence["ExtractionAttempt"]) -> None:
        self.attempts = tuple(attempts)
        self.hint = self.HINT
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = ["Unable to extract text from PDF using multiple methods:"]
        reasons: dict[str, list[str]] = {}
        for attempt in self.attempts:
            reasons.setdefault(attempt.strategy_name, [])
            reason = attempt.describe_failure()
            if reason:
                reasons[attempt.strategy_name].append(f"{attempt.variant}: {reason}")
        for index, (strategy, failures) in enumerate(reasons.items(), start=1):
            summary = "; ".join(failures) if failures else "insufficient readable text"
            lines.append(f"{index}. {strategy} - {summary}")
        lines.append(self.HINT)
        return "\n".join(lines)
