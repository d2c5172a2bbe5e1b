import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import ClassVar

from talentmatch.extraction.models import VariantResult


class ExtractionStrategy(ABC):
    """Contract for one independently fallible text-extraction strategy."""

    name: ClassVar[str]
    early_accept: ClassVar[bool] = True

    @abstractmethod
    def attempt(self, pdf_bytes: bytes, time_budget: float | None = None) -> Iterator[VariantResult]:
        """Try each variant of this strategy in precedence order.

        The iterator is lazy: each variant runs when it is requested, so a caller
        may stop early and close the iterator to release resources.

        Args:
            pdf_bytes: Raw PDF file content with a validated signature.
            time_budget: Seconds left for this strategy, or None for no limit.

        Yields:
            One VariantResult per variant tried.
        """


def variant_timeout(configured: float, deadline: float | None) -> float:
    """Clamp a configured per-variant timeout to the remaining budget."""
    if deadline is None:
        return configured
    return max(0.0, min(configured, deadline - time.monotonic()))


def budget_deadline(time_budget: float | None) -> float | None:
    if time_budget is None:
        return None
    return time.monotonic() + time_budget
