from talentmatch.config.settings import Settings
from talentmatch.extraction.exceptions import MalformedInputError
from talentmatch.extraction.factory import build_orchestrator
from talentmatch.handler.models import AnalysisRequest, AnalysisResponse
from talentmatch.handler.pipeline import AnalysisContext, AnalysisStep
from talentmatch.handler.steps import ExtractTextStep, LoadDocumentStep, SummarizeStep
from talentmatch.logging.logger import Log
from talentmatch.storage.exceptions import DocumentNotFoundError, StorageError
from talentmatch.storage.file_loader import LocalDocumentStore
from talentmatch.summarization.factory import SummarizerFactory


class AnalysisRequestHandler:
    """Runs the analyze-resume steps and maps outcomes to a response.

    Steps: load document -> extract text -> summarize for the role.
    """

    def __init__(self, steps: list[AnalysisStep], preview_length: int = 3000) -> None:
        self._steps = steps
        self._preview_length = preview_length

    def handle(self, request: AnalysisRequest) -> AnalysisResponse:
        if not request.resume_ref.strip():
            return AnalysisResponse(400, {"error": "Missing resume_ref"})

        Log.info(
            f"Analyzing resume {request.resume_ref!r} for role {request.role!r} "
            f"(candidate {request.candidate_id})"
        )
        context = AnalysisContext(request=request)
        try:
            for step in self._steps:
                context = step.run(context)
        except DocumentNotFoundError as exc:
            return AnalysisResponse(
                404,
                {
                    "error": "Failed to download PDF from storage",
                    "details": str(exc),
                    "suggestion": "Check the file path in the storage bucket.",
                },
            )
        except MalformedInputError as exc:
            Log.warning(f"Rejected {context.object_path}: {exc}")
            return AnalysisResponse(
                400,
                {
                    "error": "Uploaded file is not a PDF",
                    "details": str(exc),
                    "header_sample": exc.header_sample,
                },
            )
        except StorageError as exc:
            return AnalysisResponse(400, {"error": str(exc)})
        except Exception as exc:
            Log.exception(f"/analyze-resume error: {exc}")
            return AnalysisResponse(500, {"error": str(exc) or "Unknown error"})

        return AnalysisResponse(200, self._build_payload(context))

    def _build_payload(self, context: AnalysisContext) -> dict[str, object]:
        extraction = context.extraction
        # best-effort text is returned even on failure; pdf_parse_success flags it
        text = extraction.text if extraction is not None else ""
        extraction_payload = extraction.to_payload(self._preview_length) if extraction else {}
        return {
            "extracted_text": text[: self._preview_length],
            "full_text_length": len(text),
            "analysis": context.analysis,
            "pdf_parse_success": bool(extraction and extraction.succeeded),
            "extraction": {
                "best_score": extraction_payload.get("best_score"),
                "total_elapsed_ms": extraction_payload.get("total_elapsed_ms"),
                "error": extraction_payload.get("error"),
                "hint": extraction_payload.get("hint"),
                "attempts": extraction_payload.get("attempts", []),
            },
            "debug_info": {
                "object_path": context.object_path,
                "file_size": len(context.raw_bytes),
                "text_extracted": bool(text),
            },
        }


def build_handler(settings: Settings) -> AnalysisRequestHandler:
    """Build an AnalysisRequestHandler with all required collaborators."""
    steps: list[AnalysisStep] = [
        LoadDocumentStep(
            LocalDocumentStore(files_root=settings.files_root, bucket=settings.storage_bucket)
        ),
        ExtractTextStep(
            build_orchestrator(settings),
            time_budget=settings.extraction_time_budget_seconds,
        ),
        SummarizeStep(SummarizerFactory.create(settings)),
    ]
    return AnalysisRequestHandler(steps=steps, preview_length=settings.preview_length)
