import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from functools import partial
from typing import Any, TypeVar

from labelflow.audit.base import BaseAuditRecorder
from labelflow.audit.models import AuditRecord
from labelflow.config.settings import Settings
from labelflow.logging.logger import Log
from labelflow.orchestrator.base import BaseLabelService
from labelflow.orchestrator.exceptions import InvalidInputError, ProcessingUnavailableError
from labelflow.orchestrator.models import (
    BatchItemOutcome,
    BatchOutcome,
    CountryFanoutOutcome,
    HealthStatus,
    LabelUpload,
)
from labelflow.orchestrator.upload_validator import UploadValidator
from labelflow.processing.base import BaseProcessingClient
from labelflow.processing.models import (
    OcrResult,
    PipelineResult,
    ProcessingRequest,
    StructureResult,
    normalize_country,
)
from labelflow.validation.base import BaseValidationClient
from labelflow.validation.models import ValidationResult

T = TypeVar("T")
TaskOutcome = tuple[Any, Exception | None]

DEADLINE_MESSAGE = "Request deadline exceeded before completion"


class LabelOrchestrator(BaseLabelService):
    """Sequences processing and validation engine calls for every label workflow.

    Single-image flows: validate, translate, translate_detailed.
    Fan-out flows: translate_batch (many images, one country) and
    translate_multi_country (one image, many countries).
    """

    def __init__(
        self,
        processing_client: BaseProcessingClient,
        validation_client: BaseValidationClient,
        audit_recorder: BaseAuditRecorder,
        settings: Settings,
        upload_validator: UploadValidator | None = None,
    ) -> None:
        self._processing_client = processing_client
        self._validation_client = validation_client
        self._audit_recorder = audit_recorder
        self._settings = settings
        self._upload_validator = upload_validator or UploadValidator(
            settings.max_upload_bytes
        )

    # ------------------------------------------------------------------
    # single image
    # ------------------------------------------------------------------
    def validate(
        self, username: str, upload: LabelUpload, country: str | None = None
    ) -> ValidationResult:
        request = self._build_request(upload, country)
        Log.info(
            f"Starting validation for user: {username}, country: {request.target_country}"
        )
        try:
            pipeline = self._processing_client.run_full_pipeline(request)
            self._log_timings(pipeline)
            result = self._validation_client.validate(pipeline.html_output)
        except Exception as exc:
            Log.exception(f"Validation failed for {upload.filename}")
            self._record_failure(username, "validate", upload.filename, request.target_country)
            raise ProcessingUnavailableError(f"Validation failed: {exc}") from exc

        self._record(
            AuditRecord.create(
                username=username,
                processing_type="validate",
                file_name=upload.filename,
                status="completed",
                country=request.target_country,
                error_count=result.total_errors,
                warning_count=result.warning_count,
            )
        )
        return result

    def translate(self, username: str, upload: LabelUpload, country: str | None = None) -> str:
        return self._translate_single(username, upload, country).html_output

    def translate_detailed(
        self, username: str, upload: LabelUpload, country: str | None = None
    ) -> PipelineResult:
        return self._translate_single(username, upload, country)

    def extract_text_only(self, upload: LabelUpload) -> OcrResult:
        """Run OCR alone. Not audited."""
        self._upload_validator.check(upload)
        Log.info(f"Extracting text from: {upload.filename}")
        try:
            return self._processing_client.extract_text(upload.content, upload.filename)
        except Exception as exc:
            Log.exception(f"OCR failed for {upload.filename}")
            raise ProcessingUnavailableError(f"Text extraction failed: {exc}") from exc

    def structure_only(self, texts: list[str], language: str) -> StructureResult:
        """Run structuring alone on already extracted lines. Not audited."""
        if not texts:
            raise InvalidInputError("At least one text line is required")
        if not language or not language.strip():
            raise InvalidInputError("Language is required")
        Log.info(f"Structuring data for language: {language}")
        try:
            return self._processing_client.structure(texts, language.strip())
        except Exception as exc:
            Log.exception("Structure processing failed")
            raise ProcessingUnavailableError(f"Structuring failed: {exc}") from exc

    # ------------------------------------------------------------------
    # fan-out
    # ------------------------------------------------------------------
    def translate_batch(
        self,
        username: str,
        uploads: Sequence[LabelUpload],
        country: str | None = None,
    ) -> BatchOutcome:
        """Translate up to max_batch_files images concurrently.

        Item failures are reported per item. One audit record is written per image.
        """
        if not uploads:
            raise InvalidInputError("At least one file is required")
        if len(uploads) > self._settings.max_batch_files:
            raise InvalidInputError(
                f"Too many files: {len(uploads)} (max {self._settings.max_batch_files})"
            )
        requests = [self._build_request(upload, country) for upload in uploads]
        deadline = self._start_deadline()
        target_country = requests[0].target_country
        Log.info(
            f"Starting batch translation for {len(uploads)} files, "
            f"user: {username}, country: {target_country}"
        )

        outcomes = self._run_concurrently(
            [partial(self._processing_client.run_full_pipeline, request) for request in requests],
            deadline,
        )

        items = []
        for upload, (result, error) in zip(uploads, outcomes):
            if error is None:
                items.append(BatchItemOutcome(source_file=upload.filename, result=result))
            else:
                Log.error(f"Batch item {upload.filename} failed: {error}")
                items.append(BatchItemOutcome(source_file=upload.filename, error=str(error)))

        for item in items:
            status = "completed"
            if not item.succeeded and not self._settings.batch_audit_always_completed:
                status = "failed"
            self._record(
                AuditRecord.create(
                    username=username,
                    processing_type="translate_batch",
                    file_name=item.source_file,
                    status=status,
                    country=target_country,
                )
            )

        batch = BatchOutcome(items=tuple(items))
        Log.info(
            f"Batch translation finished: {len(batch.succeeded)} succeeded, "
            f"{len(batch.failed)} failed"
        )
        return batch

    def translate_multi_country(
        self,
        username: str,
        upload: LabelUpload,
        countries: Sequence[str],
    ) -> CountryFanoutOutcome:
        """Render one image for several countries, sharing a single OCR + structuring pass.

        A country whose translation or rendering fails is left out of the outputs.
        """
        self._upload_validator.check(upload)
        codes = self._resolve_countries(countries)
        deadline = self._start_deadline()
        Log.info(f"Translating to multiple countries: {codes}, user: {username}")

        try:
            ocr = self._processing_client.extract_text(
                upload.content, upload.filename, timeout=self._remaining(deadline)
            )
            structured = self._processing_client.structure(
                ocr.texts, ocr.language, timeout=self._remaining(deadline)
            )
        except Exception as exc:
            Log.exception(f"Shared OCR/structuring failed for {upload.filename}")
            raise ProcessingUnavailableError(
                f"Multi-country translation failed: {exc}"
            ) from exc

        outcomes = self._run_concurrently(
            [
                partial(self._translate_and_render, structured.data, ocr.language, code)
                for code in codes
            ],
            deadline,
        )

        outputs: dict[str, str] = {}
        failed: list[str] = []
        for code, (markup, error) in zip(codes, outcomes):
            if error is None:
                outputs[code] = markup
            else:
                Log.error(f"Failed to translate to country {code}: {error}")
                failed.append(code)
        return CountryFanoutOutcome(outputs=outputs, failed_countries=tuple(failed))

    # ------------------------------------------------------------------
    # health
    # ------------------------------------------------------------------
    def health(self) -> HealthStatus:
        return HealthStatus(
            service=self._settings.service_name,
            processing_api_healthy=self._processing_client.is_reachable(),
            circuit_breaker_state=self._processing_client.circuit_state().value,
        )

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _translate_single(
        self, username: str, upload: LabelUpload, country: str | None
    ) -> PipelineResult:
        request = self._build_request(upload, country)
        Log.info(
            f"Starting translation for user: {username}, country: {request.target_country}"
        )
        try:
            result = self._processing_client.run_full_pipeline(request)
        except Exception as exc:
            Log.exception(f"Translation failed for {upload.filename}")
            self._record_failure(username, "translate", upload.filename, request.target_country)
            raise ProcessingUnavailableError(f"Translation failed: {exc}") from exc

        Log.info(f"Translation completed in {result.processing_time.total_time:.2f}s")
        self._record(
            AuditRecord.create(
                username=username,
                processing_type="translate",
                file_name=upload.filename,
                status="completed",
                country=request.target_country,
            )
        )
        return result

    def _translate_and_render(
        self, data: dict[str, Any], language: str, country: str, *, timeout: float
    ) -> str:
        deadline = time.monotonic() + timeout
        translated = self._processing_client.translate(data, language, country, timeout=timeout)
        return self._processing_client.render(
            country, translated.translated_data, timeout=self._remaining(deadline)
        )

    def _build_request(self, upload: LabelUpload, country: str | None) -> ProcessingRequest:
        self._upload_validator.check(upload)
        return ProcessingRequest(
            image=upload.content,
            filename=upload.filename,
            target_country=self._resolve_country(country),
            render_html=True,
        )

    def _resolve_country(self, country: str | None) -> str:
        if country is None or not country.strip():
            return normalize_country(self._settings.default_country)
        return normalize_country(country)

    def _resolve_countries(self, countries: Sequence[str]) -> list[str]:
        if not countries:
            raise InvalidInputError("At least one country is required")
        if len(countries) > self._settings.max_countries:
            raise InvalidInputError(
                f"Too many countries: {len(countries)} (max {self._settings.max_countries})"
            )
        codes: list[str] = []
        for country in countries:
            try:
                code = normalize_country(country)
            except ValueError as exc:
                raise InvalidInputError(str(exc)) from exc
            if code not in codes:
                codes.append(code)
        return codes

    def _start_deadline(self) -> float:
        return time.monotonic() + self._settings.request_timeout_seconds

    @staticmethod
    def _remaining(deadline: float) -> float:
        """Seconds left before the deadline; raises TimeoutError once it has passed."""
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError(DEADLINE_MESSAGE)
        return remaining

    def _call_within(self, task: Callable[..., T], deadline: float) -> T:
        return task(timeout=self._remaining(deadline))

    def _run_concurrently(
        self, tasks: list[Callable[..., T]], deadline: float
    ) -> list[TaskOutcome]:
        """Run tasks on a bounded pool; return (value, error) pairs in task order.

        Each task is called with ``timeout=`` set to the time left when it starts,
        so remote calls in flight end at the deadline too. Tasks still pending
        at the deadline are cancelled and reported as TimeoutError.
        """
        workers = max(1, min(self._settings.max_concurrency, len(tasks)))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="label-fanout")
        try:
            futures = [executor.submit(self._call_within, task, deadline) for task in tasks]
            _, pending = wait(futures, timeout=max(0.0, deadline - time.monotonic()))
            outcomes: list[TaskOutcome] = []
            for future in futures:
                if future in pending:
                    future.cancel()
                    outcomes.append((None, TimeoutError(DEADLINE_MESSAGE)))
                    continue
                error = future.exception()
                if error is None:
                    outcomes.append((future.result(), None))
                elif isinstance(error, Exception):
                    outcomes.append((None, error))
                else:
                    raise error
            return outcomes
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _log_timings(self, pipeline: PipelineResult) -> None:
        timing = pipeline.processing_time
        Log.info(
            f"Pipeline completed - OCR: {timing.ocr_time:.2f}s, "
            f"Structure: {timing.structure_time:.2f}s, "
            f"Translate: {timing.translate_time:.2f}s"
        )

    def _record_failure(
        self, username: str, processing_type: str, file_name: str, country: str
    ) -> None:
        self._record(
            AuditRecord.create(
                username=username,
                processing_type=processing_type,
                file_name=file_name,
                status="failed",
                country=country,
            )
        )

    def _record(self, record: AuditRecord) -> None:
        try:
            self._audit_recorder.record(record.username, record)
            Log.info(
                f"History saved for user: {record.username}, "
                f"type: {record.processing_type}, status: {record.status}"
            )
        except Exception as exc:
            Log.error(f"Failed to save history for {record.username}: {exc}")
