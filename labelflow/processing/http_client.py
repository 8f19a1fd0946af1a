import mimetypes
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from labelflow.logging.logger import Log
from labelflow.processing.base import BaseProcessingClient
from labelflow.processing.circuit_breaker import CircuitBreaker
from labelflow.processing.exceptions import (
    ProcessingError,
    ProcessingNetworkError,
    ProcessingResponseError,
)
from labelflow.processing.models import (
    CircuitState,
    OcrResult,
    PipelineResult,
    ProcessingRequest,
    StructureResult,
    TranslationResult,
)
from labelflow.processing.response_builder import (
    build_ocr_result,
    build_pipeline_result,
    build_structure_result,
    build_translation_result,
)

T = TypeVar("T")


class HttpProcessingClient(BaseProcessingClient):
    """Processing engine adapter speaking the engine's JSON/multipart HTTP API.

    Every stage call is gated by a circuit breaker; the health check is not.
    """

    HEALTH_TIMEOUT_SECONDS = 5.0

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 60.0,
        breaker: CircuitBreaker | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._breaker = breaker or CircuitBreaker(name="processing-api")
        self._client = http_client or httpx.Client(
            base_url=self._base_url,
            timeout=timeout_seconds,
        )
        self._owns_client = http_client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def run_full_pipeline(
        self, request: ProcessingRequest, *, timeout: float | None = None
    ) -> PipelineResult:
        with Log.stage("pipeline", f"{request.filename} ({request.target_country})"):
            return self._post(
                "/pipeline",
                lambda response: build_pipeline_result(self._json(response)),
                timeout=timeout,
                files={"image": self._file_part(request.filename, request.image)},
                data={
                    "target_country": request.target_country,
                    "generate_html": "true" if request.render_html else "false",
                },
            )

    def extract_text(
        self, image: bytes, filename: str, *, timeout: float | None = None
    ) -> OcrResult:
        return self._post(
            "/ocr",
            lambda response: build_ocr_result(self._json(response)),
            timeout=timeout,
            files={"file": self._file_part(filename, image)},
        )

    def structure(
        self, texts: list[str], language: str, *, timeout: float | None = None
    ) -> StructureResult:
        return self._post(
            "/structure",
            lambda response: build_structure_result(self._json(response)),
            timeout=timeout,
            json={"language": language, "texts": texts},
        )

    def translate(
        self,
        data: dict[str, Any],
        language: str,
        target_country: str,
        *,
        timeout: float | None = None,
    ) -> TranslationResult:
        return self._post(
            "/translate",
            lambda response: build_translation_result(self._json(response)),
            timeout=timeout,
            json={"language": language, "data": data, "target_country": target_country},
        )

    def render(
        self, country: str, data: dict[str, Any], *, timeout: float | None = None
    ) -> str:
        return self._post(
            "/generate-html",
            self._html,
            timeout=timeout,
            json={"country": country, "data": data},
        )

    def is_reachable(self) -> bool:
        try:
            response = self._client.get("/health", timeout=self.HEALTH_TIMEOUT_SECONDS)
        except httpx.HTTPError as exc:
            Log.warning(f"Processing API health check failed: {exc}")
            return False
        return response.is_success

    def circuit_state(self) -> CircuitState:
        return self._breaker.state

    def _post(
        self,
        path: str,
        build: Callable[[httpx.Response], T],
        timeout: float | None = None,
        **kwargs: Any,
    ) -> T:
        self._breaker.before_call()
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            response = self._client.post(path, **kwargs)
        except httpx.TimeoutException as exc:
            self._breaker.record_failure()
            raise ProcessingNetworkError(f"Processing API timeout on {path}: {exc}") from exc
        except httpx.HTTPError as exc:
            self._breaker.record_failure()
            raise ProcessingNetworkError(
                f"Processing API network error on {path}: {exc}"
            ) from exc

        if not response.is_success:
            error = ProcessingResponseError(
                f"Processing API returned {response.status_code} on {path}",
                status_code=response.status_code,
            )
            # A rejected request says nothing about the engine's health.
            if error.is_client_error:
                self._breaker.record_success()
            else:
                self._breaker.record_failure()
            raise error

        try:
            result = build(response)
        except ProcessingError:
            self._breaker.record_failure()
            raise
        self._breaker.record_success()
        return result

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        # ValueError covers undecodable bytes as well as malformed JSON.
        try:
            return response.json()
        except ValueError as exc:
            raise ProcessingResponseError(f"Invalid JSON response: {exc}") from exc

    @classmethod
    def _html(cls, response: httpx.Response) -> str:
        content_type = response.headers.get("content-type", "")
        if content_type.startswith("text/"):
            return response.text
        payload = cls._json(response)
        html = payload.get("html") if isinstance(payload, dict) else None
        if not isinstance(html, str):
            raise ProcessingResponseError("'html' must be a string")
        return html

    @staticmethod
    def _file_part(filename: str, content: bytes) -> tuple[str, bytes, str]:
        mime_type, _ = mimetypes.guess_type(filename)
        return filename, content, mime_type or "application/octet-stream"
