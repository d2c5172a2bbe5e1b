class ScoringError(Exception):
    """Raised when the scoring vocabulary cannot be loaded."""
