from pathlib import Path

from talentmatch.summarization.exceptions import SummarizationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def _read(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SummarizationError(f"Failed to load {label}: {exc}") from exc


def load_prompt_template(path: Path | None = None) -> str:
    """Load the screening prompt template.

    The template carries {resume_text} and {role} placeholders.

    Raises:
        SummarizationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "screening_prompt.txt", "prompt template")


def load_system_prompt(path: Path | None = None) -> str:
    """Load the system prompt sent with every screening request.

    Raises:
        SummarizationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt").strip()
