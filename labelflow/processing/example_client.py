"""Example processing client.

Use this module as a reference when implementing new engine adapters.
Implement BaseProcessingClient and register the backend in ProcessingClientFactory.
"""

import html
from typing import Any, ClassVar

from labelflow.processing.base import BaseProcessingClient
from labelflow.processing.models import (
    CircuitState,
    OcrResult,
    PipelineResult,
    ProcessingRequest,
    ProcessingTime,
    StructureResult,
    TranslationResult,
)


class ExampleProcessingClient(BaseProcessingClient):
    """Returns a fixed label for every image.

    No network calls. Useful for local development and as a template.
    """

    LANGUAGE: ClassVar[str] = "ko"
    TEXTS: ClassVar[list[str]] = ["Example Snack", "Ingredients: wheat flour, sugar"]
    DATA: ClassVar[dict[str, Any]] = {
        "product": {
            "type": "snack",
            "brand": "Example Snack",
            "ingredients": ["wheat flour", "sugar"],
            "allergens": ["wheat"],
        },
        "nutrition": {"serving_size": "30g", "calories": "150"},
        "additional": {"storage": "Keep in a cool, dry place"},
    }

    def run_full_pipeline(
        self, request: ProcessingRequest, *, timeout: float | None = None
    ) -> PipelineResult:
        _ = timeout
        ocr = self.extract_text(request.image, request.filename)
        structured = self.structure(ocr.texts, ocr.language)
        translated = self.translate(structured.data, ocr.language, request.target_country)
        markup = (
            self.render(request.target_country, translated.translated_data)
            if request.render_html
            else ""
        )
        return PipelineResult(
            ocr_result=ocr,
            structured_data=structured,
            translated_data=translated,
            html_output=markup,
            processing_time=ProcessingTime(),
        )

    def extract_text(
        self, image: bytes, filename: str, *, timeout: float | None = None
    ) -> OcrResult:
        _ = image, timeout
        return OcrResult(filename=filename, language=self.LANGUAGE, texts=list(self.TEXTS))

    def structure(
        self, texts: list[str], language: str, *, timeout: float | None = None
    ) -> StructureResult:
        _ = texts, timeout
        return StructureResult(language=language, data=dict(self.DATA))

    def translate(
        self,
        data: dict[str, Any],
        language: str,
        target_country: str,
        *,
        timeout: float | None = None,
    ) -> TranslationResult:
        _ = timeout
        return TranslationResult(
            source_language=language,
            target_country=target_country,
            translated_data=dict(data),
        )

    def render(
        self, country: str, data: dict[str, Any], *, timeout: float | None = None
    ) -> str:
        _ = timeout
        brand = data.get("product", {}).get("brand", "")
        return (
            f'<div class="label" data-country="{html.escape(country)}">'
            f"<h1>{html.escape(str(brand))}</h1></div>"
        )

    def is_reachable(self) -> bool:
        return True

    def circuit_state(self) -> CircuitState:
        return CircuitState.CLOSED
