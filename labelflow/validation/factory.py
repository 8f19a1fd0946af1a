from labelflow.config.settings import Settings
from labelflow.validation.base import BaseValidationClient
from labelflow.validation.example_client import ExampleValidationClient
from labelflow.validation.http_client import HttpValidationClient


class ValidationClientFactory:
    """Creates the configured validation engine adapter."""

    @classmethod
    def create(cls, settings: Settings) -> BaseValidationClient:
        backend = settings.validation_backend.lower()
        if backend == "example":
            return ExampleValidationClient()
        if backend == "http":
            return HttpValidationClient(
                base_url=settings.validation_api_base_url,
                timeout_seconds=settings.validation_timeout_seconds,
            )
        raise ValueError(
            f"Unknown validation backend '{backend}'. Choose from: ['http', 'example']"
        )
