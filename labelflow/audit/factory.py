from labelflow.audit.base import BaseAuditRecorder
from labelflow.audit.memory_recorder import InMemoryAuditRecorder
from labelflow.audit.postgres_recorder import PostgresAuditRecorder
from labelflow.config.settings import Settings


class AuditRecorderFactory:
    """Creates the configured audit recorder."""

    ADAPTERS: dict[str, type[BaseAuditRecorder]] = {
        "postgres": PostgresAuditRecorder,
        "memory": InMemoryAuditRecorder,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAuditRecorder:
        backend = settings.audit_backend.lower()
        adapter_cls = cls.ADAPTERS.get(backend)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown audit backend '{backend}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def requires_database(cls, settings: Settings) -> bool:
        return settings.audit_backend.lower() == "postgres"
