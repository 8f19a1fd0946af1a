"""Validates the validation engine's JSON against finding invariants."""

from typing import Any

from labelflow.logging.logger import Log
from labelflow.validation.exceptions import ValidationResponseError
from labelflow.validation.models import (
    SEVERITIES,
    Finding,
    IncorrectValue,
    Location,
    MissingItem,
    Reference,
    Source,
    ValidationResult,
)


def build_validation_result(data: Any) -> ValidationResult:
    """Validate raw parsed JSON and build a ValidationResult.

    total_errors is recomputed from the findings; a differing reported value
    is logged and discarded.

    Raises:
        ValidationResponseError: on any structural violation.
    """
    if not isinstance(data, dict):
        raise ValidationResponseError("Validation response must be an object")
    raw_errors = data.get("errors", [])
    if not isinstance(raw_errors, list):
        raise ValidationResponseError("'errors' must be a list")
    findings = [_build_finding(item, i) for i, item in enumerate(raw_errors)]
    total_errors = sum(1 for finding in findings if finding.severity == "error")

    reported = data.get("total_errors")
    if reported is not None and reported != total_errors:
        Log.warning(
            f"Validation engine reported total_errors={reported}, "
            f"findings contain {total_errors} errors"
        )

    return ValidationResult(
        product_name=_str_or_empty(data, "product_name", "response"),
        source_html=_str_or_empty(data, "source_html", "response"),
        product_type=_str_or_empty(data, "product_type", "response"),
        total_errors=total_errors,
        errors=findings,
    )


def _build_finding(raw: Any, index: int) -> Finding:
    if not isinstance(raw, dict):
        raise ValidationResponseError(f"Finding at index {index} must be an object")
    missing = _build_missing(raw.get("missing"), index)
    incorrect = _build_incorrect(raw.get("incorrect"), index)
    if (missing is None) == (incorrect is None):
        raise ValidationResponseError(
            f"Finding at index {index}: exactly one of 'missing' or 'incorrect' is required"
        )
    return Finding(
        location=_build_location(raw.get("location"), index),
        reference=_build_reference(raw.get("reference"), index),
        missing=missing,
        incorrect=incorrect,
    )


def _build_location(raw: Any, index: int) -> Location:
    if not isinstance(raw, dict):
        raise ValidationResponseError(f"Finding at index {index}: 'location' must be an object")
    selector = raw.get("selector")
    if not isinstance(selector, str):
        raise ValidationResponseError(
            f"Finding at index {index}: 'location.selector' must be a string"
        )
    return Location(
        selector=selector,
        element_type=_str_or_empty(raw, "element_type", f"finding {index} location"),
    )


def _build_missing(raw: Any, index: int) -> MissingItem | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValidationResponseError(f"Finding at index {index}: 'missing' must be an object")
    label = f"finding {index} missing"
    return MissingItem(
        item=_str_or_empty(raw, "item", label),
        severity=_severity(raw, index),
        message=_str_or_empty(raw, "message", label),
    )


def _build_incorrect(raw: Any, index: int) -> IncorrectValue | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValidationResponseError(
            f"Finding at index {index}: 'incorrect' must be an object"
        )
    label = f"finding {index} incorrect"
    return IncorrectValue(
        current_value=_str_or_empty(raw, "current_value", label),
        issue=_str_or_empty(raw, "issue", label),
        severity=_severity(raw, index),
        message=_str_or_empty(raw, "message", label),
    )


def _build_reference(raw: Any, index: int) -> Reference:
    if raw is None:
        return Reference(regulation="")
    if not isinstance(raw, dict):
        raise ValidationResponseError(
            f"Finding at index {index}: 'reference' must be an object or null"
        )
    label = f"finding {index} reference"
    raw_sources = raw.get("sources") or []
    if not isinstance(raw_sources, list):
        raise ValidationResponseError(
            f"Finding at index {index}: 'reference.sources' must be a list"
        )
    sources = []
    for source in raw_sources:
        if not isinstance(source, dict):
            raise ValidationResponseError(
                f"Finding at index {index}: each reference source must be an object"
            )
        sources.append(
            Source(
                source=_str_or_empty(source, "source", label),
                category=_str_or_empty(source, "category", label),
            )
        )
    return Reference(
        regulation=_str_or_empty(raw, "regulation", label),
        guidance=_str_or_empty(raw, "guidance", label),
        sources=sources,
    )


def _severity(raw: dict[str, Any], index: int) -> str:
    severity = raw.get("severity")
    if severity not in SEVERITIES:
        raise ValidationResponseError(
            f"Finding at index {index}: 'severity' must be one of "
            f"{list(SEVERITIES)}, got {severity!r}"
        )
    return severity


def _str_or_empty(raw: dict[str, Any], name: str, label: str) -> str:
    value = raw.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationResponseError(f"'{label}.{name}' must be a string or null")
    return value
