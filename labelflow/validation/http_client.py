import httpx

from labelflow.logging.logger import Log
from labelflow.validation.base import BaseValidationClient
from labelflow.validation.exceptions import ValidationNetworkError, ValidationResponseError
from labelflow.validation.models import ValidationResult
from labelflow.validation.response_builder import build_validation_result


class HttpValidationClient(BaseValidationClient):
    """Validation adapter for the RAG-backed regulation engine."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 60.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = http_client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )
        self._owns_client = http_client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def validate(self, html: str) -> ValidationResult:
        try:
            response = self._client.post("/validate", json={"html": html})
        except httpx.TimeoutException as exc:
            raise ValidationNetworkError(f"Validation API timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ValidationNetworkError(f"Validation API network error: {exc}") from exc

        if not response.is_success:
            raise ValidationResponseError(
                f"Validation API returned {response.status_code}"
            )
        # ValueError covers undecodable bytes as well as malformed JSON.
        try:
            payload = response.json()
        except ValueError as exc:
            raise ValidationResponseError(f"Invalid JSON response: {exc}") from exc

        result = build_validation_result(payload)
        Log.info(
            f"Validation complete for '{result.product_name}': "
            f"{result.total_errors} errors, {result.warning_count} warnings"
        )
        return result
