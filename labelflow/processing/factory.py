from labelflow.config.settings import Settings
from labelflow.processing.base import BaseProcessingClient
from labelflow.processing.circuit_breaker import CircuitBreaker
from labelflow.processing.example_client import ExampleProcessingClient
from labelflow.processing.http_client import HttpProcessingClient
from labelflow.processing.llm.client import LlmProcessingClient
from labelflow.processing.llm.openai_client_adapter import OpenAIChatClientAdapter


class ProcessingClientFactory:
    """Creates the configured processing engine backend."""

    BACKENDS = ("http", "llm", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseProcessingClient:
        backend = settings.processing_backend.lower()
        if backend == "example":
            return ExampleProcessingClient()
        if backend == "http":
            return cls._create_http(settings)
        if backend == "llm":
            if not settings.translation_openai_model_name:
                raise ValueError(
                    "translation_openai_model_name is required for processing_backend=llm"
                )
            return LlmProcessingClient(
                engine=cls._create_http(settings),
                chat_client=OpenAIChatClientAdapter(
                    api_key=settings.translation_openai_api_key,
                    timeout_seconds=settings.translation_openai_timeout_seconds,
                    base_url=settings.translation_openai_base_url,
                ),
                model=settings.translation_openai_model_name,
                temperature=settings.translation_openai_temperature,
            )
        raise ValueError(
            f"Unknown processing backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )

    @staticmethod
    def _create_http(settings: Settings) -> HttpProcessingClient:
        breaker = CircuitBreaker(
            name="processing-api",
            failure_threshold=settings.circuit_failure_threshold,
            reset_timeout=settings.circuit_reset_timeout_seconds,
        )
        return HttpProcessingClient(
            base_url=settings.processing_api_base_url,
            timeout_seconds=settings.processing_timeout_seconds,
            breaker=breaker,
        )
