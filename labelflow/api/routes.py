"""HTTP surface for the label orchestrator.

The acting user is read from the X-User header set by the authenticating gateway.
"""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, File, Form, Header, Request, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from labelflow.config.settings import Settings
from labelflow.logging.logger import Log
from labelflow.orchestrator.exceptions import InvalidInputError
from labelflow.orchestrator.models import LabelUpload
from labelflow.orchestrator.orchestrator import LabelOrchestrator

router = APIRouter(prefix="/api/label")


class StructureRequestBody(BaseModel):
    language: str
    texts: list[str]


def get_orchestrator(request: Request) -> LabelOrchestrator:
    return request.app.state.orchestrator


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _to_upload(file: UploadFile, settings: Settings) -> LabelUpload:
    # One byte past the limit is enough for UploadValidator to reject the file.
    return LabelUpload(
        filename=file.filename or "",
        content=file.file.read(settings.max_upload_bytes + 1),
        content_type=file.content_type or "",
    )


def _split_countries(countries: list[str]) -> list[str]:
    # Accept both repeated form fields and a single comma-separated value.
    return [code for value in countries for code in value.split(",") if code.strip()]


@router.post("/validate")
def validate_label(
    file: UploadFile = File(...),
    country: str | None = Form(None),
    x_user: str = Header(...),
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    Log.info(f"Validation request from user: {x_user}, country: {country}, file: {file.filename}")
    result = orchestrator.validate(x_user, _to_upload(file, settings), country)
    return asdict(result)


@router.post("/translate", response_class=HTMLResponse)
def translate_label(
    file: UploadFile = File(...),
    country: str | None = Form(None),
    x_user: str = Header(...),
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    Log.info(f"Translation request from user: {x_user}, country: {country}, file: {file.filename}")
    return HTMLResponse(orchestrator.translate(x_user, _to_upload(file, settings), country))


@router.post("/translate/detailed")
def translate_label_detailed(
    file: UploadFile = File(...),
    country: str | None = Form(None),
    x_user: str = Header(...),
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    result = orchestrator.translate_detailed(x_user, _to_upload(file, settings), country)
    return asdict(result)


@router.post("/translate/batch")
def translate_batch(
    files: list[UploadFile] = File(...),
    country: str | None = Form(None),
    x_user: str = Header(...),
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> list[dict[str, Any]]:
    max_files = settings.max_batch_files
    if len(files) > max_files:
        raise InvalidInputError(f"Too many files: {len(files)} (max {max_files})")
    Log.info(f"Batch translation request from user: {x_user}, files: {len(files)}")
    uploads = [_to_upload(f, settings) for f in files]
    outcome = orchestrator.translate_batch(x_user, uploads, country)
    return [
        {
            "filename": item.source_file,
            "success": item.succeeded,
            "result": asdict(item.result) if item.result is not None else None,
            "error": item.error,
        }
        for item in outcome.items
    ]


@router.post("/translate/multi-country")
def translate_multi_country(
    file: UploadFile = File(...),
    countries: list[str] = Form(...),
    x_user: str = Header(...),
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    outcome = orchestrator.translate_multi_country(
        x_user, _to_upload(file, settings), _split_countries(countries)
    )
    return {
        "html_outputs": outcome.outputs,
        "failed_countries": list(outcome.failed_countries),
    }


@router.post("/ocr")
def extract_text(
    file: UploadFile = File(...),
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    return asdict(orchestrator.extract_text_only(_to_upload(file, settings)))


@router.post("/structure")
def structure_data(
    body: StructureRequestBody,
    orchestrator: LabelOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    return asdict(orchestrator.structure_only(body.texts, body.language))


@router.get("/health")
def health(orchestrator: LabelOrchestrator = Depends(get_orchestrator)) -> dict[str, Any]:
    return asdict(orchestrator.health())
