from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from labelflow.api.routes import router
from labelflow.config.settings import Settings
from labelflow.logging.logger import Log
from labelflow.orchestrator.exceptions import InvalidInputError, ProcessingUnavailableError
from labelflow.orchestrator.orchestrator import LabelOrchestrator


def create_app(orchestrator: LabelOrchestrator, settings: Settings) -> FastAPI:
    """Build the FastAPI application around an already wired orchestrator."""
    app = FastAPI(title="labelflow")
    app.state.orchestrator = orchestrator
    app.state.settings = settings
    app.include_router(router)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(_: Request, exc: InvalidInputError) -> JSONResponse:
        Log.warning(f"Invalid request: {exc}")
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(ProcessingUnavailableError)
    async def unavailable_handler(_: Request, exc: ProcessingUnavailableError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"message": str(exc)})

    return app
