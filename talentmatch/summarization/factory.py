from talentmatch.config.settings import Settings
from talentmatch.summarization.base import BaseSummarizer
from talentmatch.summarization.example_client_adapter import ExampleClientAdapter
from talentmatch.summarization.openai_client_adapter import OpenAIClientAdapter
from talentmatch.summarization.summarizer import Summarizer


class SummarizerFactory:
    """Creates the configured summarizer."""

    PROVIDERS = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> BaseSummarizer:
        provider = settings.summarization_provider.lower()
        if provider == "example":
            return Summarizer(
                client=ExampleClientAdapter(),
                model="example",
                max_chars=settings.summary_max_chars,
            )
        client = OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return Summarizer(
            client=client,
            model=settings.openai_model_name,
            temperature=settings.openai_temperature,
            max_chars=settings.summary_max_chars,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "summarization_provider=openai_compatible"
                )
            return url
        raise ValueError(
            f"Unknown summarization provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
