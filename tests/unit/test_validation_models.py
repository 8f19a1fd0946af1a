import pytest

from labelflow.validation.models import (
    Finding,
    IncorrectValue,
    Location,
    MissingItem,
    Reference,
    ValidationResult,
)

LOCATION = Location(selector=".nutrition", element_type="table")
REFERENCE = Reference(regulation="21 CFR 101.9")
MISSING = MissingItem(item="Sodium", severity="error", message="Sodium is not declared")
INCORRECT = IncorrectValue(
    current_value="5g", issue="rounding", severity="warning", message="Round to 0.5g"
)


class TestFinding:
    def test_missing_finding_exposes_detail(self) -> None:
        finding = Finding(location=LOCATION, reference=REFERENCE, missing=MISSING)
        assert finding.detail is MISSING
        assert finding.severity == "error"
        assert finding.message == "Sodium is not declared"

    def test_incorrect_finding_exposes_detail(self) -> None:
        finding = Finding(location=LOCATION, reference=REFERENCE, incorrect=INCORRECT)
        assert finding.detail is INCORRECT
        assert finding.severity == "warning"

    def test_rejects_finding_with_neither_detail(self) -> None:
        with pytest.raises(ValueError, match="exactly one"):
            Finding(location=LOCATION, reference=REFERENCE)

    def test_rejects_finding_with_both_details(self) -> None:
        with pytest.raises(ValueError, match="exactly one"):
            Finding(location=LOCATION, reference=REFERENCE, missing=MISSING, incorrect=INCORRECT)


class TestValidationResult:
    def test_warning_count(self) -> None:
        result = ValidationResult(
            product_name="Snack",
            source_html="<div/>",
            product_type="snack",
            total_errors=1,
            errors=[
                Finding(location=LOCATION, reference=REFERENCE, missing=MISSING),
                Finding(location=LOCATION, reference=REFERENCE, incorrect=INCORRECT),
            ],
        )
        assert result.warning_count == 1
