from dataclasses import dataclass, field

from talentmatch.extraction.exceptions import NoExtractableTextError


@dataclass(frozen=True)
class RawDocument:
    """Immutable PDF byte buffer captured for one extraction run."""

    content: bytes
    declared_byte_length: int

    def __post_init__(self) -> None:
        if self.declared_byte_length != len(self.content):
            raise ValueError(
                f"declared_byte_length {self.declared_byte_length} does not match "
                f"buffer length {len(self.content)}"
            )

    @classmethod
    def from_bytes(cls, data: bytes) -> "RawDocument":
        return cls(content=bytes(data), declared_byte_length=len(data))


@dataclass(frozen=True)
class SignatureCheckResult:
    valid: bool
    header_sample: str


@dataclass(frozen=True)
class Success:
    """A variant produced plausible text."""

    text: str


@dataclass(frozen=True)
class Failure:
    """A variant did not produce plausible text.

    fallback_text holds weak output kept as a last-resort candidate.
    """

    reason: str
    error_type: str = "StrategyExecutionError"
    fallback_text: str = ""


Outcome = Success | Failure


@dataclass(frozen=True)
class VariantResult:
    """What a strategy yields for one variant before it is timed and logged."""

    variant: str
    outcome: Outcome


@dataclass(frozen=True)
class ExtractionAttempt:
    strategy_name: str
    variant: str
    outcome: Outcome
    elapsed_ms: int

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def candidate_text(self) -> str:
        """Text this attempt offers for scoring, weak fallbacks included."""
        if isinstance(self.outcome, Success):
            return self.outcome.text
        return self.outcome.fallback_text

    def describe_failure(self) -> str:
        if isinstance(self.outcome, Failure):
            return self.outcome.reason
        return ""

    def to_dict(self) -> dict[str, object]:
        failure = self.outcome if isinstance(self.outcome, Failure) else None
        return {
            "strategy": self.strategy_name,
            "variant": self.variant,
            "succeeded": self.succeeded,
            "elapsed_ms": self.elapsed_ms,
            "error_type": failure.error_type if failure else None,
            "error": failure.reason if failure else None,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    text: str
    score: float
    source_attempt: ExtractionAttempt


@dataclass(frozen=True)
class ExtractionResult:
    """Terminal output of one extraction run, owned by the caller."""

    text: str
    succeeded: bool
    best_score: float
    attempts: tuple[ExtractionAttempt, ...] = field(default_factory=tuple)
    total_elapsed_ms: int = 0
    source_attempt: ExtractionAttempt | None = None
    error: NoExtractableTextError | None = None

    def to_payload(self, preview_length: int | None = None) -> dict[str, object]:
        """Serialize to a response-ready dict.

        Args:
            preview_length: Truncate extracted_text to this many characters.
                None keeps the full text.
        """
        preview = self.text if preview_length is None else self.text[:preview_length]
        return {
            "extracted_text": preview,
            "full_text_length": len(self.text),
            "succeeded": self.succeeded,
            "best_score": self.best_score,
            "total_elapsed_ms": self.total_elapsed_ms,
            "error": str(self.error) if self.error else None,
            "hint": self.error.hint if self.error else None,
            "attempts": [attempt.to_dict() for attempt in self.attempts],
        }
