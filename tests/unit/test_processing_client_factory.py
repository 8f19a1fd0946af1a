"""Tests for ProcessingClientFactory."""

from unittest.mock import patch

import pytest

from labelflow.config.settings import Settings
from labelflow.processing.example_client import ExampleProcessingClient
from labelflow.processing.factory import ProcessingClientFactory
from labelflow.processing.http_client import HttpProcessingClient
from labelflow.processing.llm.client import LlmProcessingClient


class TestProcessingClientFactory:
    def test_creates_example_backend(self) -> None:
        client = ProcessingClientFactory.create(Settings(processing_backend="example"))
        assert isinstance(client, ExampleProcessingClient)

    def test_creates_http_backend(self) -> None:
        client = ProcessingClientFactory.create(
            Settings(processing_backend="HTTP", processing_api_base_url="http://engine:9000/")
        )
        assert isinstance(client, HttpProcessingClient)

    def test_creates_llm_backend(self) -> None:
        settings = Settings(
            processing_backend="llm",
            translation_openai_api_key="k",
            translation_openai_model_name="gpt-4o-mini",
            translation_openai_timeout_seconds=42,
        )
        with patch("labelflow.processing.factory.OpenAIChatClientAdapter") as mock_adapter:
            client = ProcessingClientFactory.create(settings)
        assert isinstance(client, LlmProcessingClient)
        mock_adapter.assert_called_once_with(api_key="k", timeout_seconds=42, base_url=None)

    def test_llm_backend_requires_model_name(self) -> None:
        settings = Settings(processing_backend="llm", translation_openai_model_name="")
        with pytest.raises(ValueError, match="translation_openai_model_name"):
            ProcessingClientFactory.create(settings)

    def test_unknown_backend_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown processing backend"):
            ProcessingClientFactory.create(Settings(processing_backend="grpc"))
