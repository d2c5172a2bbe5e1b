from talentmatch.config.settings import Settings
from talentmatch.extraction.base import ExtractionStrategy
from talentmatch.extraction.external_tool import PdfToTextStrategy
from talentmatch.extraction.ocr import OcrStrategy
from talentmatch.extraction.orchestrator import ExtractionOrchestrator
from talentmatch.extraction.raw_patterns import RawBytePatternStrategy
from talentmatch.extraction.structured_parser import StructuredParserStrategy
from talentmatch.pdf.factory import PdfLayoutReaderFactory
from talentmatch.scoring.scorer import QualityScorer


def build_strategies(settings: Settings, scorer: QualityScorer) -> list[ExtractionStrategy]:
    """Strategies in precedence order: external tool, structured parser, [OCR], raw bytes."""
    strategies: list[ExtractionStrategy] = [
        PdfToTextStrategy(
            executable=settings.pdftotext_path,
            timeout_seconds=settings.tool_timeout_seconds,
            min_chars=settings.early_accept_min_chars,
        ),
        StructuredParserStrategy(
            reader=PdfLayoutReaderFactory.create(settings),
            timeout_seconds=settings.structured_parser_timeout_seconds,
            min_chars=settings.early_accept_min_chars,
        ),
    ]
    if settings.ocr_enabled:
        strategies.append(
            OcrStrategy(
                executable=settings.tesseract_path,
                timeout_seconds=settings.tool_timeout_seconds,
                max_pages=settings.ocr_max_pages,
                dpi=settings.ocr_dpi,
                min_chars=settings.early_accept_min_chars,
            )
        )
    strategies.append(RawBytePatternStrategy(scorer=scorer))
    return strategies


def build_orchestrator(settings: Settings) -> ExtractionOrchestrator:
    """Build an ExtractionOrchestrator with all configured strategies."""
    scorer = QualityScorer(
        min_score=settings.accept_min_score,
        min_chars=settings.accept_min_chars,
    )
    return ExtractionOrchestrator(
        strategies=build_strategies(settings, scorer),
        scorer=scorer,
        early_accept_min_chars=settings.early_accept_min_chars,
    )
