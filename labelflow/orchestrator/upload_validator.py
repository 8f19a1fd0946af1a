from pathlib import PurePath

from labelflow.orchestrator.exceptions import InvalidInputError
from labelflow.orchestrator.models import LabelUpload

SUPPORTED_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".webp", ".tif", ".tiff"}
)


class UploadValidator:
    """Rejects uploads the processing engine cannot accept, before any remote call."""

    def __init__(self, max_upload_bytes: int) -> None:
        self._max_upload_bytes = max_upload_bytes

    def check(self, upload: LabelUpload) -> None:
        """Raise InvalidInputError if the upload is empty, too large or not an image."""
        if not upload.filename or not upload.filename.strip():
            raise InvalidInputError("Uploaded file has no name")
        extension = PurePath(upload.filename).suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise InvalidInputError(
                f"Unsupported file type '{extension or upload.filename}'. "
                f"Choose from: {sorted(SUPPORTED_EXTENSIONS)}"
            )
        if upload.content_type and not (
            upload.content_type.startswith("image/")
            or upload.content_type == "application/octet-stream"
        ):
            raise InvalidInputError(
                f"Unsupported content type '{upload.content_type}' for {upload.filename}"
            )
        if upload.size == 0:
            raise InvalidInputError(f"Uploaded file {upload.filename} is empty")
        if upload.size > self._max_upload_bytes:
            raise InvalidInputError(
                f"Uploaded file {upload.filename} is {upload.size} bytes "
                f"(max {self._max_upload_bytes})"
            )
