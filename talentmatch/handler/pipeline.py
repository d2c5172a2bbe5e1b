from abc import ABC, abstractmethod
from dataclasses import dataclass

from talentmatch.extraction.models import ExtractionResult
from talentmatch.handler.models import AnalysisRequest


@dataclass(slots=True)
class AnalysisContext:
    request: AnalysisRequest
    object_path: str = ""
    raw_bytes: bytes = b""
    extraction: ExtractionResult | None = None
    analysis: str = ""


class AnalysisStep(ABC):
    @abstractmethod
    def run(self, context: AnalysisContext) -> AnalysisContext:
        raise NotImplementedError
