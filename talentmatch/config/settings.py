from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdftotext_path: str = "pdftotext"
    tool_timeout_seconds: float = Field(default=10.0, gt=0)

    structured_parser_engine: str = "pdfplumber"
    structured_parser_timeout_seconds: float = Field(default=30.0, gt=0)

    ocr_enabled: bool = False
    tesseract_path: str = "tesseract"
    ocr_max_pages: int = Field(default=3, ge=1)
    ocr_dpi: int = Field(default=300, ge=72)

    early_accept_min_chars: int = 20
    accept_min_chars: int = 50
    accept_min_score: float = 10.0
    extraction_time_budget_seconds: float | None = None

    files_root: Path = Path("/app/files")
    storage_bucket: str = "talentmatch"

    preview_length: int = 3000
    summary_max_chars: int = 15000
    default_role: str = "Software Engineer"

    summarization_provider: str = "openai"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_temperature: float = 0.2
    openai_timeout_seconds: int = 30
    openai_compatible_base_url: str = ""
