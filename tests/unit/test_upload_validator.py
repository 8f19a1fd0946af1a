import pytest

from labelflow.orchestrator.exceptions import InvalidInputError
from labelflow.orchestrator.models import LabelUpload
from labelflow.orchestrator.upload_validator import UploadValidator
from tests.helpers import PNG_BYTES


@pytest.fixture
def validator() -> UploadValidator:
    return UploadValidator(max_upload_bytes=1024)


class TestUploadValidator:
    def test_accepts_image(self, validator: UploadValidator) -> None:
        validator.check(LabelUpload("label.PNG", PNG_BYTES, "image/png"))

    def test_accepts_octet_stream(self, validator: UploadValidator) -> None:
        validator.check(LabelUpload("label.jpg", PNG_BYTES, "application/octet-stream"))

    def test_accepts_missing_content_type(self, validator: UploadValidator) -> None:
        validator.check(LabelUpload("label.webp", PNG_BYTES))

    def test_rejects_missing_name(self, validator: UploadValidator) -> None:
        with pytest.raises(InvalidInputError, match="no name"):
            validator.check(LabelUpload("  ", PNG_BYTES, "image/png"))

    def test_rejects_unsupported_extension(self, validator: UploadValidator) -> None:
        with pytest.raises(InvalidInputError, match="Unsupported file type"):
            validator.check(LabelUpload("label.pdf", PNG_BYTES, "image/png"))

    def test_rejects_non_image_content_type(self, validator: UploadValidator) -> None:
        with pytest.raises(InvalidInputError, match="content type"):
            validator.check(LabelUpload("label.png", PNG_BYTES, "text/plain"))

    def test_rejects_empty_file(self, validator: UploadValidator) -> None:
        with pytest.raises(InvalidInputError, match="is empty"):
            validator.check(LabelUpload("label.png", b"", "image/png"))

    def test_rejects_oversize_file(self, validator: UploadValidator) -> None:
        with pytest.raises(InvalidInputError, match="max 1024"):
            validator.check(LabelUpload("label.png", b"x" * 1025, "image/png"))
