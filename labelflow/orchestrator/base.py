from abc import ABC, abstractmethod

from labelflow.orchestrator.models import LabelUpload
from labelflow.processing.models import PipelineResult
from labelflow.validation.models import ValidationResult


class BaseLabelService(ABC):
    """Single-image label operations offered to callers."""

    @abstractmethod
    def validate(
        self, username: str, upload: LabelUpload, country: str | None = None
    ) -> ValidationResult:
        """Render the label for ``country`` and check it against regulations.

        Raises:
            InvalidInputError: if the upload or country is rejected up front.
            ProcessingUnavailableError: if a remote engine call fails.
        """

    @abstractmethod
    def translate(self, username: str, upload: LabelUpload, country: str | None = None) -> str:
        """Return the label rendered as HTML for ``country``."""

    @abstractmethod
    def translate_detailed(
        self, username: str, upload: LabelUpload, country: str | None = None
    ) -> PipelineResult:
        """Return the whole pipeline result, including timings and structured data."""
