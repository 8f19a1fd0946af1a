"""Shared builders for label pipeline tests."""

from labelflow.orchestrator.models import LabelUpload
from labelflow.processing.models import (
    OcrResult,
    PipelineResult,
    ProcessingTime,
    StructureResult,
    TranslationResult,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def make_upload(filename: str = "label.png", content: bytes = PNG_BYTES) -> LabelUpload:
    return LabelUpload(filename=filename, content=content, content_type="image/png")


def make_pipeline_result(
    country: str = "USA",
    html: str = "<div>label</div>",
    filename: str = "label.png",
) -> PipelineResult:
    return PipelineResult(
        ocr_result=OcrResult(filename=filename, language="ko", texts=["과자"]),
        structured_data=StructureResult(language="ko", data={"product": {"brand": "과자"}}),
        translated_data=TranslationResult(
            source_language="ko",
            target_country=country,
            translated_data={"product": {"brand": "Snack"}},
        ),
        html_output=html,
        processing_time=ProcessingTime(
            ocr_time=1.0, structure_time=0.5, translate_time=0.7, html_time=0.1, total_time=2.3
        ),
    )


def pipeline_payload(country: str = "USA") -> dict[str, object]:
    """Raw engine JSON for a full pipeline run."""
    return {
        "ocr_result": {"filename": "label.png", "language": "ko", "texts": ["과자", "밀가루"]},
        "structured_data": {"language": "ko", "data": {"product": {"brand": "과자"}}},
        "translated_data": {
            "source_language": "ko",
            "target_country": country,
            "translated_data": {"product": {"brand": "Snack"}},
        },
        "html_output": "<div>Snack</div>",
        "processing_time": {
            "ocr_time": 1.2,
            "structure_time": 0.4,
            "translate_time": 0.8,
            "html_time": 0.1,
            "total_time": 2.5,
        },
    }
