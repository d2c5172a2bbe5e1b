class SummarizationError(Exception):
    """Raised when resume summarization fails."""


class SummarizationNetworkError(SummarizationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
