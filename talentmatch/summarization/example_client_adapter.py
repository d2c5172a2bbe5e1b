"""Offline summarization client.

Returns a fixed screening report without network calls. Useful for local
development, tests, and as a template for new provider adapters: implement
BaseSummarizationClient and register the provider in SummarizerFactory.
"""

from typing import ClassVar

from talentmatch.summarization.client_base import BaseSummarizationClient


class ExampleClientAdapter(BaseSummarizationClient):
    """Adapter that echoes a canned report for any prompt."""

    DEFAULT_RESPONSE: ClassVar[str] = (
        "Candidate Summary\n"
        "- Offline summarization; no AI provider configured.\n\n"
        "Overall Verdict\n"
        "Configure a summarization provider to receive a real assessment."
    )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return self.DEFAULT_RESPONSE
