import pytest

from labelflow.orchestrator.models import LabelUpload
from tests.helpers import PNG_BYTES, make_upload


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture()
def upload() -> LabelUpload:
    return make_upload()
