from dataclasses import dataclass, field

from labelflow.processing.models import PipelineResult


@dataclass(frozen=True)
class LabelUpload:
    """An uploaded label image as received from the caller."""

    filename: str
    content: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class BatchItemOutcome:
    """Result of one image in a batch. Exactly one of result / error is set."""

    source_file: str
    result: PipelineResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchOutcome:
    """Per-image outcomes in input order."""

    items: tuple[BatchItemOutcome, ...] = ()

    @property
    def succeeded(self) -> list[BatchItemOutcome]:
        return [item for item in self.items if item.succeeded]

    @property
    def failed(self) -> list[BatchItemOutcome]:
        return [item for item in self.items if not item.succeeded]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class CountryFanoutOutcome:
    """Rendered label per country; countries that failed are only listed in failed_countries."""

    outputs: dict[str, str] = field(default_factory=dict)
    failed_countries: tuple[str, ...] = ()


@dataclass(frozen=True)
class HealthStatus:
    service: str
    processing_api_healthy: bool
    circuit_breaker_state: str
    status: str = "ok"
