import uvicorn

from labelflow.api.app import create_app
from labelflow.audit.factory import AuditRecorderFactory
from labelflow.config.settings import Settings
from labelflow.database.connection import close_pool, init_pool
from labelflow.logging.logger import Log
from labelflow.orchestrator.orchestrator import LabelOrchestrator
from labelflow.processing.factory import ProcessingClientFactory
from labelflow.validation.factory import ValidationClientFactory


def build_orchestrator(settings: Settings) -> LabelOrchestrator:
    """Build a LabelOrchestrator with the configured backends."""
    return LabelOrchestrator(
        processing_client=ProcessingClientFactory.create(settings),
        validation_client=ValidationClientFactory.create(settings),
        audit_recorder=AuditRecorderFactory.create(settings),
        settings=settings,
    )


def main() -> None:
    """Entry point: settings -> logging -> pool -> orchestrator -> HTTP server."""
    settings = Settings()
    Log.configure(settings.log_level)
    uses_database = AuditRecorderFactory.requires_database(settings)
    if uses_database:
        init_pool(settings)

    try:
        app = create_app(build_orchestrator(settings), settings)
        Log.info(f"Starting {settings.service_name} on {settings.api_host}:{settings.api_port}")
        uvicorn.run(app, host=settings.api_host, port=settings.api_port)
    finally:
        if uses_database:
            close_pool()


if __name__ == "__main__":
    main()
