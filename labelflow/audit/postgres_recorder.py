import psycopg

from labelflow.audit.base import BaseAuditRecorder
from labelflow.audit.exceptions import AuditError, UnknownUserError
from labelflow.audit.models import AuditRecord
from labelflow.database.connection import get_connection


class PostgresAuditRecorder(BaseAuditRecorder):
    """Appends records to the history table, resolving the owner by username."""

    def record(self, username: str, record: AuditRecord) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO history (
                            type, file_name, date, time, status,
                            error_count, warning_count, country, user_id
                        )
                        SELECT %s, %s, %s, %s, %s, %s, %s, %s, u.id
                        FROM users u
                        WHERE u.username = %s
                        RETURNING id
                        """,
                        (
                            record.processing_type,
                            record.file_name,
                            record.date,
                            record.time,
                            record.status,
                            record.error_count,
                            record.warning_count,
                            record.country,
                            username,
                        ),
                    )
                    row = cur.fetchone()
                if row is None:
                    conn.rollback()
                    raise UnknownUserError(f"User '{username}' not found")
                conn.commit()
        except psycopg.Error as exc:
            raise AuditError(f"Failed to store audit record: {exc}") from exc
