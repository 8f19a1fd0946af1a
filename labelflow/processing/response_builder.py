"""Builds typed pipeline models from raw engine JSON, rejecting malformed payloads."""

from typing import Any

from labelflow.processing.exceptions import ProcessingResponseError
from labelflow.processing.models import (
    OcrResult,
    PipelineResult,
    ProcessingTime,
    StructureResult,
    TranslationResult,
)

_TIMING_FIELDS = ("ocr_time", "structure_time", "translate_time", "html_time", "total_time")


def build_ocr_result(raw: Any) -> OcrResult:
    data = _require_object(raw, "ocr_result")
    texts = data.get("texts", [])
    if not isinstance(texts, list) or not all(isinstance(t, str) for t in texts):
        raise ProcessingResponseError("'ocr_result.texts' must be a list of strings")
    return OcrResult(
        filename=_optional_str(data, "filename", "ocr_result"),
        language=_required_str(data, "language", "ocr_result"),
        texts=list(texts),
    )


def build_structure_result(raw: Any) -> StructureResult:
    data = _require_object(raw, "structured_data")
    return StructureResult(
        language=_required_str(data, "language", "structured_data"),
        data=_require_object(data.get("data", {}), "structured_data.data"),
    )


def build_translation_result(raw: Any) -> TranslationResult:
    data = _require_object(raw, "translated_data")
    return TranslationResult(
        source_language=_optional_str(data, "source_language", "translated_data"),
        target_country=_required_str(data, "target_country", "translated_data"),
        translated_data=_require_object(
            data.get("translated_data", {}), "translated_data.translated_data"
        ),
    )


def build_processing_time(raw: Any) -> ProcessingTime:
    if raw is None:
        return ProcessingTime()
    data = _require_object(raw, "processing_time")
    timings: dict[str, float] = {}
    for name in _TIMING_FIELDS:
        value = data.get(name, 0.0)
        if value is None:
            value = 0.0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ProcessingResponseError(f"'processing_time.{name}' must be a number")
        timings[name] = float(value)
    return ProcessingTime(**timings)


def build_pipeline_result(raw: Any) -> PipelineResult:
    """Validate a full pipeline response body and build a PipelineResult."""
    data = _require_object(raw, "pipeline response")
    for name in ("ocr_result", "structured_data", "translated_data"):
        if name not in data:
            raise ProcessingResponseError(f"Missing required field: {name}")
    html = data.get("html_output") or ""
    if not isinstance(html, str):
        raise ProcessingResponseError("'html_output' must be a string or null")
    return PipelineResult(
        ocr_result=build_ocr_result(data["ocr_result"]),
        structured_data=build_structure_result(data["structured_data"]),
        translated_data=build_translation_result(data["translated_data"]),
        html_output=html,
        processing_time=build_processing_time(data.get("processing_time")),
    )


def _require_object(raw: Any, label: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ProcessingResponseError(f"'{label}' must be an object")
    return raw


def _required_str(data: dict[str, Any], name: str, label: str) -> str:
    value = data.get(name)
    if not value or not isinstance(value, str):
        raise ProcessingResponseError(f"'{label}.{name}' must be a non-empty string")
    return value


def _optional_str(data: dict[str, Any], name: str, label: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ProcessingResponseError(f"'{label}.{name}' must be a string or null")
    return value
