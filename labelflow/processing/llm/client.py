"""Processing backend that keeps OCR, structuring and rendering on the remote
engine but delegates translation to a chat model."""

import json
import time
from pathlib import Path
from typing import Any

from labelflow.logging.logger import Log
from labelflow.processing.base import BaseProcessingClient
from labelflow.processing.exceptions import ProcessingNetworkError, ProcessingResponseError
from labelflow.processing.llm.client_base import BaseChatClient
from labelflow.processing.llm.prompt_loader import load_json_schema, load_prompt_template
from labelflow.processing.models import (
    CircuitState,
    OcrResult,
    PipelineResult,
    ProcessingRequest,
    ProcessingTime,
    StructureResult,
    TranslationResult,
)


class LlmProcessingClient(BaseProcessingClient):
    def __init__(
        self,
        *,
        engine: BaseProcessingClient,
        chat_client: BaseChatClient,
        model: str,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "You translate food labels. Answer with JSON only.",
    ) -> None:
        self._engine = engine
        self._chat_client = chat_client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(self._json_schema)

    def run_full_pipeline(
        self, request: ProcessingRequest, *, timeout: float | None = None
    ) -> PipelineResult:
        deadline = None if timeout is None else time.monotonic() + timeout
        started = time.perf_counter()
        ocr = self.extract_text(
            request.image, request.filename, timeout=self._remaining(deadline)
        )
        ocr_done = time.perf_counter()
        structured = self.structure(
            ocr.texts, ocr.language, timeout=self._remaining(deadline)
        )
        structure_done = time.perf_counter()
        translated = self.translate(
            structured.data,
            ocr.language,
            request.target_country,
            timeout=self._remaining(deadline),
        )
        translate_done = time.perf_counter()
        markup = ""
        if request.render_html:
            markup = self.render(
                request.target_country,
                translated.translated_data,
                timeout=self._remaining(deadline),
            )
        finished = time.perf_counter()

        return PipelineResult(
            ocr_result=ocr,
            structured_data=structured,
            translated_data=translated,
            html_output=markup,
            processing_time=ProcessingTime(
                ocr_time=ocr_done - started,
                structure_time=structure_done - ocr_done,
                translate_time=translate_done - structure_done,
                html_time=finished - translate_done,
                total_time=finished - started,
            ),
        )

    def extract_text(
        self, image: bytes, filename: str, *, timeout: float | None = None
    ) -> OcrResult:
        return self._engine.extract_text(image, filename, timeout=timeout)

    def structure(
        self, texts: list[str], language: str, *, timeout: float | None = None
    ) -> StructureResult:
        return self._engine.structure(texts, language, timeout=timeout)

    def translate(
        self,
        data: dict[str, Any],
        language: str,
        target_country: str,
        *,
        timeout: float | None = None,
    ) -> TranslationResult:
        prompt = self._prompt_template.format(
            source_language=language,
            target_country=target_country,
            json_schema=self._json_schema,
            structured_data=json.dumps(data, ensure_ascii=False),
        )
        Log.debug(f"Translation prompt:\n{prompt}")
        raw = self._chat_client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
            timeout=timeout,
        )
        Log.debug(f"Translation model raw response:\n{raw}")
        parsed = self._parse_json(raw)
        translated = parsed.get("translated_data")
        if not isinstance(translated, dict):
            raise ProcessingResponseError("'translated_data' must be an object")
        return TranslationResult(
            source_language=language,
            target_country=target_country,
            translated_data=translated,
        )

    def render(
        self, country: str, data: dict[str, Any], *, timeout: float | None = None
    ) -> str:
        return self._engine.render(country, data, timeout=timeout)

    def is_reachable(self) -> bool:
        return self._engine.is_reachable()

    def circuit_state(self) -> CircuitState:
        return self._engine.circuit_state()

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise ProcessingNetworkError("Pipeline deadline exceeded before the next stage")
        return remaining

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ProcessingResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ProcessingResponseError("JSON response must be an object")
        return parsed
