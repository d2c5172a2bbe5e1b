from talentmatch.extraction.orchestrator import ExtractionOrchestrator
from talentmatch.handler.pipeline import AnalysisContext, AnalysisStep
from talentmatch.logging.logger import Log
from talentmatch.storage.file_loader import BaseDocumentStore
from talentmatch.summarization.base import BaseSummarizer
from talentmatch.summarization.exceptions import SummarizationError


class LoadDocumentStep(AnalysisStep):
    def __init__(self, document_store: BaseDocumentStore) -> None:
        self._document_store = document_store

    def run(self, context: AnalysisContext) -> AnalysisContext:
        context.object_path = self._document_store.object_path(context.request.resume_ref)
        context.raw_bytes = self._document_store.load(context.request.resume_ref)
        Log.info(f"Downloaded PDF {context.object_path}: {len(context.raw_bytes)} bytes")
        return context


class ExtractTextStep(AnalysisStep):
    def __init__(
        self,
        orchestrator: ExtractionOrchestrator,
        time_budget: float | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._time_budget = time_budget

    def run(self, context: AnalysisContext) -> AnalysisContext:
        context.extraction = self._orchestrator.extract(context.raw_bytes, self._time_budget)
        Log.info(
            f"Extracted {len(context.extraction.text)} chars from {context.object_path} "
            f"(succeeded={context.extraction.succeeded})"
        )
        return context


class SummarizeStep(AnalysisStep):
    """Forwards the extracted text, or the caller's hint, to the summarizer."""

    def __init__(self, summarizer: BaseSummarizer) -> None:
        self._summarizer = summarizer

    def run(self, context: AnalysisContext) -> AnalysisContext:
        extraction = context.extraction
        if extraction is not None and extraction.succeeded:
            text = extraction.text
        else:
            text = context.request.profile_hint
        try:
            context.analysis = self._summarizer.summarize(text, context.request.role)
        except SummarizationError as exc:
            Log.warning(f"Summarization failed for {context.object_path}: {exc}")
            context.analysis = f"Analysis skipped: {exc}"
        return context
