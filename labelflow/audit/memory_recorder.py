import threading

from labelflow.audit.base import BaseAuditRecorder
from labelflow.audit.models import AuditRecord


class InMemoryAuditRecorder(BaseAuditRecorder):
    """Keeps records in process memory. Intended for local development."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[AuditRecord] = []

    def record(self, username: str, record: AuditRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> list[AuditRecord]:
        with self._lock:
            return list(self._records)
