from abc import ABC, abstractmethod

from labelflow.audit.models import AuditRecord


class BaseAuditRecorder(ABC):
    """Append-only sink for processing audit records."""

    @abstractmethod
    def record(self, username: str, record: AuditRecord) -> None:
        """Persist one record owned by ``username``.

        Raises:
            AuditError: if the record cannot be stored.
        """
