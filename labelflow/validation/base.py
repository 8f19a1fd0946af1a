from abc import ABC, abstractmethod

from labelflow.validation.models import ValidationResult


class BaseValidationClient(ABC):
    """Contract for all regulatory validation adapters."""

    @abstractmethod
    def validate(self, html: str) -> ValidationResult:
        """Check rendered label HTML against the regulation rules.

        Args:
            html: Label markup produced by the processing engine.

        Returns:
            ValidationResult with one Finding per detected issue.

        Raises:
            ValidationError: on any failure.
        """
