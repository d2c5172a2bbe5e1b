"""AI-powered resume screening summary."""

from pathlib import Path

from talentmatch.logging.logger import Log
from talentmatch.summarization.base import BaseSummarizer
from talentmatch.summarization.client_base import BaseSummarizationClient
from talentmatch.summarization.prompt_loader import load_prompt_template, load_system_prompt

NO_TEXT_PLACEHOLDER = (
    "[No text could be extracted from the PDF. It may be image-based or encrypted. "
    "Provide general guidance on what information is missing and how the candidate "
    "could improve the resume for the role.]"
)


class Summarizer(BaseSummarizer):
    """Summarizes resume text for a role using an AI provider."""

    def __init__(
        self,
        *,
        client: BaseSummarizationClient,
        model: str,
        temperature: float = 0.2,
        max_chars: int = 15000,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_chars = max_chars
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)

    def summarize(self, text: str, role: str) -> str:
        prompt = self._build_prompt(text, role)
        Log.debug(f"Screening prompt:\n{prompt}")
        summary = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
        Log.info(f"Screening summary complete: {len(summary)} characters for role '{role}'")
        return summary

    def _build_prompt(self, text: str, role: str) -> str:
        body = text.strip()[: self._max_chars] or NO_TEXT_PLACEHOLDER
        return self._prompt_template.format(resume_text=body, role=role)
