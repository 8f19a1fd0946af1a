from dataclasses import dataclass, field
from typing import cast

SEVERITIES = ("info", "warning", "error")


@dataclass(frozen=True)
class Location:
    """Where on the rendered label a finding applies."""

    selector: str
    element_type: str = ""


@dataclass(frozen=True)
class MissingItem:
    """A mandatory label element that is absent."""

    item: str
    severity: str
    message: str


@dataclass(frozen=True)
class IncorrectValue:
    """A label element whose value violates a rule."""

    current_value: str
    issue: str
    severity: str
    message: str


@dataclass(frozen=True)
class Source:
    source: str
    category: str = ""


@dataclass(frozen=True)
class Reference:
    """The regulation a finding is based on."""

    regulation: str
    guidance: str = ""
    sources: list[Source] = field(default_factory=list)


@dataclass(frozen=True)
class Finding:
    """A single regulatory finding. Exactly one of missing / incorrect is set."""

    location: Location
    reference: Reference
    missing: MissingItem | None = None
    incorrect: IncorrectValue | None = None

    def __post_init__(self) -> None:
        if (self.missing is None) == (self.incorrect is None):
            raise ValueError("A finding needs exactly one of missing or incorrect")

    @property
    def detail(self) -> MissingItem | IncorrectValue:
        if self.missing is not None:
            return self.missing
        return cast(IncorrectValue, self.incorrect)

    @property
    def severity(self) -> str:
        return self.detail.severity

    @property
    def message(self) -> str:
        return self.detail.message


@dataclass(frozen=True)
class ValidationResult:
    """Regulatory validation outcome for one rendered label.

    total_errors counts findings with severity "error" only.
    """

    product_name: str
    source_html: str
    product_type: str
    total_errors: int = 0
    errors: list[Finding] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return sum(1 for finding in self.errors if finding.severity == "warning")
