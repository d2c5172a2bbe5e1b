import time
from collections.abc import Sequence

from talentmatch.extraction.base import ExtractionStrategy
from talentmatch.extraction.exceptions import (
    NoExtractableTextError,
    StrategyExecutionError,
    StrategyTimeoutError,
)
from talentmatch.extraction.models import (
    ExtractionAttempt,
    ExtractionResult,
    Failure,
    ScoredCandidate,
    Success,
    VariantResult,
)
from talentmatch.extraction.signature import PdfSignatureValidator
from talentmatch.logging.logger import Log
from talentmatch.scoring.scorer import QualityScorer

DEADLINE_VARIANT = "deadline"


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class _Run:
    """Mutable bookkeeping for one extract() call."""

    def __init__(self, scorer: QualityScorer, deadline: float | None) -> None:
        self.scorer = scorer
        self.deadline = deadline
        self.started = time.monotonic()
        self.attempts: list[ExtractionAttempt] = []
        self.best: ScoredCandidate | None = None

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return self.deadline - time.monotonic()

    def record(self, strategy_name: str, result: VariantResult, elapsed_ms: int) -> ExtractionAttempt:
        attempt = ExtractionAttempt(
            strategy_name=strategy_name,
            variant=result.variant,
            outcome=result.outcome,
            elapsed_ms=elapsed_ms,
        )
        self.attempts.append(attempt)
        text = attempt.candidate_text.strip()
        if text:
            score = self.scorer.score(text)
            if self.best is None or score > self.best.score:
                self.best = ScoredCandidate(text=text, score=score, source_attempt=attempt)
        return attempt


class ExtractionOrchestrator:
    """Runs extraction strategies in precedence order and picks the best text.

    Flow: validate signature -> try each strategy's variants in order -> stop on
    an early accept -> otherwise score the best retained candidate.
    """

    def __init__(
        self,
        strategies: Sequence[ExtractionStrategy],
        scorer: QualityScorer,
        validator: PdfSignatureValidator | None = None,
        early_accept_min_chars: int = 20,
    ) -> None:
        self._strategies = list(strategies)
        self._scorer = scorer
        self._validator = validator or PdfSignatureValidator()
        self._early_accept_min_chars = early_accept_min_chars

    @property
    def strategy_names(self) -> list[str]:
        return [strategy.name for strategy in self._strategies]

    def extract(self, pdf_bytes: bytes, time_budget: float | None = None) -> ExtractionResult:
        """Extract text from PDF bytes.

        Args:
            pdf_bytes: Full PDF content.
            time_budget: Optional overall budget in seconds. When it runs out,
                remaining strategies are skipped and partial results are kept.

        Returns:
            ExtractionResult; on failure succeeded is False and error holds a
            NoExtractableTextError with the diagnostic trail.

        Raises:
            MalformedInputError: the input does not start with a PDF signature.
        """
        Log.info(f"Starting PDF text extraction from {len(pdf_bytes)} byte buffer")
        header = self._validator.ensure_valid(pdf_bytes)
        Log.debug(f"PDF header: {header.header_sample!r}")

        deadline = None if time_budget is None else time.monotonic() + time_budget
        run = _Run(self._scorer, deadline)

        for strategy in self._strategies:
            remaining = run.remaining()
            if remaining is not None and remaining <= 0:
                Log.warning(f"Overall deadline reached, skipping {strategy.name}")
                run.record(
                    strategy.name,
                    VariantResult(
                        DEADLINE_VARIANT,
                        Failure("overall time budget exhausted", "StrategyTimeoutError"),
                    ),
                    0,
                )
                continue
            accepted = self._run_strategy(strategy, pdf_bytes, run)
            if accepted is not None:
                return self._finish(run, accepted, succeeded=True)

        return self._score_best(run)

    def _run_strategy(
        self,
        strategy: ExtractionStrategy,
        pdf_bytes: bytes,
        run: _Run,
    ) -> ExtractionAttempt | None:
        """Drive one strategy; return the attempt that early-accepted, if any."""
        Log.info(f"Trying strategy '{strategy.name}'")
        variant_started = time.monotonic()
        try:
            variants = iter(strategy.attempt(pdf_bytes, run.remaining()))
            try:
                for result in variants:
                    attempt = run.record(strategy.name, result, _elapsed_ms(variant_started))
                    if self._is_early_accept(strategy, attempt):
                        Log.info(
                            f"Early accept from {strategy.name}/{attempt.variant}: "
                            f"{len(attempt.candidate_text)} characters"
                        )
                        return attempt
                    self._log_attempt(attempt)
                    variant_started = time.monotonic()
            finally:
                # plain iterators have no close(); generators must be closed to stop pending variants
                close = getattr(variants, "close", None)
                if close is not None:
                    close()
        except (StrategyTimeoutError, StrategyExecutionError) as exc:
            self._record_crash(strategy, exc, run, variant_started)
        except Exception as exc:
            Log.exception(f"Strategy '{strategy.name}' crashed")
            self._record_crash(strategy, exc, run, variant_started)
        return None

    def _is_early_accept(self, strategy: ExtractionStrategy, attempt: ExtractionAttempt) -> bool:
        return (
            strategy.early_accept
            and isinstance(attempt.outcome, Success)
            and len(attempt.outcome.text.strip()) > self._early_accept_min_chars
        )

    @staticmethod
    def _record_crash(
        strategy: ExtractionStrategy,
        exc: Exception,
        run: _Run,
        started: float,
    ) -> None:
        Log.warning(f"Strategy '{strategy.name}' failed: {exc}")
        run.record(
            strategy.name,
            VariantResult(strategy.name, Failure(str(exc) or repr(exc), type(exc).__name__)),
            _elapsed_ms(started),
        )

    @staticmethod
    def _log_attempt(attempt: ExtractionAttempt) -> None:
        if isinstance(attempt.outcome, Failure):
            Log.info(
                f"{attempt.strategy_name}/{attempt.variant} failed after "
                f"{attempt.elapsed_ms}ms: {attempt.outcome.reason}"
            )
        else:
            Log.info(
                f"{attempt.strategy_name}/{attempt.variant} produced "
                f"{len(attempt.outcome.text)} characters"
            )

    def _score_best(self, run: _Run) -> ExtractionResult:
        best = run.best
        if best is not None and self._scorer.accepts(best.text, best.score):
            Log.info(
                f"Accepted best candidate from {best.source_attempt.strategy_name}/"
                f"{best.source_attempt.variant} (score {best.score:.1f})"
            )
            return self._finish(run, best.source_attempt, succeeded=True)

        error = NoExtractableTextError(run.attempts)
        Log.error(f"PDF text extraction failed: {error}")
        return ExtractionResult(
            text=best.text if best else "",
            succeeded=False,
            best_score=best.score if best else 0.0,
            attempts=tuple(run.attempts),
            total_elapsed_ms=_elapsed_ms(run.started),
            source_attempt=best.source_attempt if best else None,
            error=error,
        )

    def _finish(self, run: _Run, attempt: ExtractionAttempt, succeeded: bool) -> ExtractionResult:
        text = attempt.candidate_text.strip()
        result = ExtractionResult(
            text=text,
            succeeded=succeeded,
            best_score=self._scorer.score(text),
            attempts=tuple(run.attempts),
            total_elapsed_ms=_elapsed_ms(run.started),
            source_attempt=attempt,
        )
        Log.info(
            f"PDF extraction succeeded: {len(text)} characters in {result.total_elapsed_ms}ms"
        )
        return result
