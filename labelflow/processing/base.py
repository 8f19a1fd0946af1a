from abc import ABC, abstractmethod
from typing import Any

from labelflow.processing.models import (
    CircuitState,
    OcrResult,
    PipelineResult,
    ProcessingRequest,
    StructureResult,
    TranslationResult,
)


class BaseProcessingClient(ABC):
    """Contract for all processing engine adapters.

    Every stage method takes an optional ``timeout``: the seconds left before
    the caller's request deadline. None means the adapter's own default.
    """

    @abstractmethod
    def run_full_pipeline(
        self, request: ProcessingRequest, *, timeout: float | None = None
    ) -> PipelineResult:
        """Run OCR -> structure -> translate -> render for one image.

        Raises:
            ProcessingError: on any failure, including an open circuit.
        """

    @abstractmethod
    def extract_text(
        self, image: bytes, filename: str, *, timeout: float | None = None
    ) -> OcrResult:
        """Run OCR only."""

    @abstractmethod
    def structure(
        self, texts: list[str], language: str, *, timeout: float | None = None
    ) -> StructureResult:
        """Turn raw OCR lines into structured label data."""

    @abstractmethod
    def translate(
        self,
        data: dict[str, Any],
        language: str,
        target_country: str,
        *,
        timeout: float | None = None,
    ) -> TranslationResult:
        """Translate structured data into the target country's format."""

    @abstractmethod
    def render(
        self, country: str, data: dict[str, Any], *, timeout: float | None = None
    ) -> str:
        """Render translated data as label HTML for a country."""

    @abstractmethod
    def is_reachable(self) -> bool:
        """Ping the engine without going through the circuit breaker."""

    @abstractmethod
    def circuit_state(self) -> CircuitState:
        """Report the current circuit breaker state."""
