from datetime import datetime

import pytest

from labelflow.audit.models import AuditRecord


class TestAuditRecordCreate:
    def test_formats_date_and_time(self) -> None:
        record = AuditRecord.create(
            username="alice",
            processing_type="validate",
            file_name="label.png",
            status="completed",
            country="USA",
            error_count=2,
            warning_count=1,
            now=datetime(2024, 3, 7, 9, 5, 59),
        )
        assert record.date == "2024.03.07"
        assert record.time == "09:05"
        assert record.error_count == 2
        assert record.warning_count == 1
        assert record.country == "USA"

    def test_counts_default_to_zero(self) -> None:
        record = AuditRecord.create(
            username="alice",
            processing_type="translate",
            file_name="label.png",
            status="failed",
            country="JPN",
        )
        assert record.error_count == 0
        assert record.warning_count == 0


class TestAuditRecordValidation:
    def test_unknown_processing_type_raises(self) -> None:
        with pytest.raises(ValueError, match="processing type"):
            AuditRecord(
                username="alice",
                processing_type="ocr",
                file_name="a.png",
                date="2024.01.01",
                time="10:00",
                status="completed",
            )

    def test_unknown_status_raises(self) -> None:
        with pytest.raises(ValueError, match="audit status"):
            AuditRecord(
                username="alice",
                processing_type="translate_batch",
                file_name="a.png",
                date="2024.01.01",
                time="10:00",
                status="pending",
            )
