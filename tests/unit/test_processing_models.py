import dataclasses

import pytest

from labelflow.processing.models import ProcessingRequest, normalize_country


class TestNormalizeCountry:
    @pytest.mark.parametrize("raw", ["usa", "USA", " Usa ", "uSa"])
    def test_upper_cases_and_strips(self, raw: str) -> None:
        assert normalize_country(raw) == "USA"

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_rejects_blank(self, raw: str) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            normalize_country(raw)


class TestProcessingRequest:
    def test_normalizes_country_on_construction(self) -> None:
        request = ProcessingRequest(image=b"x", filename="a.png", target_country="kor")
        assert request.target_country == "KOR"
        assert request.render_html is True

    def test_lower_and_upper_case_requests_are_equal(self) -> None:
        lower = ProcessingRequest(image=b"x", filename="a.png", target_country="usa")
        upper = ProcessingRequest(image=b"x", filename="a.png", target_country="USA")
        assert lower == upper

    def test_is_immutable(self) -> None:
        request = ProcessingRequest(image=b"x", filename="a.png", target_country="USA")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.target_country = "KOR"  # type: ignore[misc]
