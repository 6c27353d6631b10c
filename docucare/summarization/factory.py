from docucare.config.settings import Settings
from docucare.summarization.client_base import BaseGenerativeClient
from docucare.summarization.example_client_adapter import ExampleClientAdapter
from docucare.summarization.gemini_client_adapter import GeminiClientAdapter
from docucare.summarization.openai_client_adapter import OpenAIClientAdapter
from docucare.summarization.summarizer import Summarizer


class SummarizerFactory:
    """Creates the configured summarizer."""

    PROVIDERS = ("gemini", "openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> Summarizer:
        """Create a configured summarizer from application settings."""
        return Summarizer(
            client=cls._create_client(settings),
            temperature=settings.summarization_temperature,
            max_output_tokens=settings.summarization_max_output_tokens,
            image_quality=settings.summarization_image_quality,
        )

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseGenerativeClient:
        provider = settings.summarization_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=settings.summarization_gemini_api_key,
                model=settings.summarization_gemini_model_name,
                base_url=settings.summarization_gemini_base_url,
                timeout_seconds=settings.summarization_timeout_seconds,
                max_retries=settings.summarization_max_retries,
            )
        if provider == "openai":
            return OpenAIClientAdapter(
                api_key=settings.summarization_openai_api_key,
                model=settings.summarization_openai_model_name,
                timeout_seconds=settings.summarization_timeout_seconds,
                max_retries=settings.summarization_max_retries,
                base_url=settings.summarization_openai_base_url,
            )
        raise ValueError(
            f"Unknown summarization provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
