from abc import ABC, abstractmethod


class BaseSummarizer(ABC):
    """Contract for resume summarization adapters."""

    @abstractmethod
    def summarize(self, text: str, role: str) -> str:
        """Produce a screening summary of resume text for a target role.

        Args:
            text: Extracted resume text, a caller-supplied hint, or an empty
                  string when nothing could be extracted.
            role: Target role label, passed through unmodified.

        Returns:
            Free-form structured prose.

        Raises:
            SummarizationError: on any failure.
        """
