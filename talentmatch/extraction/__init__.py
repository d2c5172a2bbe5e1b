from talentmatch.extraction.exceptions import (
    ExtractionError,
    MalformedInputError,
    NoExtractableTextError,
    NoTextLayerError,
    StrategyExecutionError,
    StrategyTimeoutError,
    UnderlyingToolMissingError,
)
from talentmatch.extraction.factory import build_orchestrator
from talentmatch.extraction.models import ExtractionAttempt, ExtractionResult, RawDocument
from talentmatch.extraction.orchestrator import ExtractionOrchestrator

__all__ = [
    "ExtractionAttempt",
    "ExtractionError",
    "ExtractionOrchestrator",
    "ExtractionResult",
    "MalformedInputError",
    "NoExtractableTextError",
    "NoTextLayerError",
    "RawDocument",
    "StrategyExecutionError",
    "StrategyTimeoutError",
    "UnderlyingToolMissingError",
    "build_orchestrator",
]
