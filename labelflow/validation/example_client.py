from labelflow.validation.base import BaseValidationClient
from labelflow.validation.models import (
    Finding,
    Location,
    MissingItem,
    Reference,
    Source,
    ValidationResult,
)


class ExampleValidationClient(BaseValidationClient):
    """Reports a single warning for every label. No network calls."""

    def validate(self, html: str) -> ValidationResult:
        finding = Finding(
            location=Location(selector=".nutrition-facts", element_type="section"),
            missing=MissingItem(
                item="Added Sugars",
                severity="warning",
                message="Added sugars line is not declared",
            ),
            reference=Reference(
                regulation="21 CFR 101.9(c)(6)(iii)",
                guidance="Declare added sugars below total sugars.",
                sources=[Source(source="eCFR", category="nutrition")],
            ),
        )
        return ValidationResult(
            product_name="Example Snack",
            source_html=html,
            product_type="snack",
            total_errors=0,
            errors=[finding],
        )
