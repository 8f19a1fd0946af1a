from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CircuitState(str, Enum):
    """Circuit breaker states as reported by the processing client."""

    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


def normalize_country(country: str) -> str:
    """Strip and upper-case a target country code."""
    code = (country or "").strip().upper()
    if not code:
        raise ValueError("target country must be a non-empty code")
    return code


@dataclass(frozen=True)
class ProcessingRequest:
    """One image submitted to the full OCR -> structure -> translate -> render pipeline."""

    image: bytes
    filename: str
    target_country: str
    render_html: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "target_country", normalize_country(self.target_country))


@dataclass(frozen=True)
class OcrResult:
    """Text lines detected on the label image."""

    filename: str
    language: str
    texts: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StructureResult:
    """Label text organised into product / nutrition / additional sections."""

    language: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TranslationResult:
    """Structured data translated into a target country's label format."""

    source_language: str
    target_country: str
    translated_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessingTime:
    """Per-stage timings in seconds."""

    ocr_time: float = 0.0
    structure_time: float = 0.0
    translate_time: float = 0.0
    html_time: float = 0.0
    total_time: float = 0.0


@dataclass(frozen=True)
class PipelineResult:
    """Output of one full pipeline run."""

    ocr_result: OcrResult
    structured_data: StructureResult
    translated_data: TranslationResult
    html_output: str = ""
    processing_time: ProcessingTime = field(default_factory=ProcessingTime)
