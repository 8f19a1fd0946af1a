from dataclasses import dataclass
from datetime import datetime

PROCESSING_TYPES = ("validate", "translate", "translate_batch")
STATUSES = ("completed", "failed")


@dataclass(frozen=True)
class AuditRecord:
    """One processing attempt as it appears in a user's history."""

    username: str
    processing_type: str
    file_name: str
    date: str
    time: str
    status: str
    error_count: int = 0
    warning_count: int = 0
    country: str = ""

    def __post_init__(self) -> None:
        if self.processing_type not in PROCESSING_TYPES:
            raise ValueError(f"Unknown processing type: {self.processing_type!r}")
        if self.status not in STATUSES:
            raise ValueError(f"Unknown audit status: {self.status!r}")

    @classmethod
    def create(
        cls,
        *,
        username: str,
        processing_type: str,
        file_name: str,
        status: str,
        country: str,
        error_count: int = 0,
        warning_count: int = 0,
        now: datetime | None = None,
    ) -> "AuditRecord":
        """Stamp a record with the current local date ("YYYY.MM.DD") and time ("HH:MM")."""
        moment = now or datetime.now()
        return cls(
            username=username,
            processing_type=processing_type,
            file_name=file_name,
            date=moment.strftime("%Y.%m.%d"),
            time=moment.strftime("%H:%M"),
            status=status,
            error_count=error_count,
            warning_count=warning_count,
            country=country,
        )
