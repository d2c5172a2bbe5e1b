from collections.abc import Callable
from pathlib import Path

import pytest

from talentmatch.config.settings import Settings


@pytest.fixture()
def make_settings(tmp_path: Path, missing_tool: str) -> Callable[..., Settings]:
    """Build Settings for offline runs: no pdftotext, example summarizer, tmp files root."""

    def _make(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "pdftotext_path": missing_tool,
            "tesseract_path": missing_tool,
            "files_root": tmp_path / "files",
            "summarization_provider": "example",
        }
        values.update(overrides)
        return Settings(**values)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def store_file(tmp_path: Path) -> Callable[[str, bytes], str]:
    """Write bytes under the files root and return the bucket-prefixed reference."""

    def _store(object_path: str, data: bytes) -> str:
        target = tmp_path / "files" / object_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return f"talentmatch/{object_path}"

    return _store
