import uuid
from typing import Any

from psycopg.rows import dict_row

from docucare.database.connection import get_connection
from docucare.processor.exceptions import RecordNotFoundError
from docucare.processor.models import MedicalRecord

_COLUMNS = """
    id, created_at, title, ocr_text, summary, pdf_data, page_count, owner_email
"""


class RecordRepository:
    """Database operations for the medical_records table."""

    def insert(self, record: MedicalRecord) -> None:
        """Persist a finished record in a single transaction."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO medical_records ({_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        record.id,
                        record.created_at,
                        record.title,
                        record.ocr_text,
                        record.summary,
                        record.pdf_data,
                        record.page_count,
                        record.owner_email,
                    ),
                )
            conn.commit()

    def delete(self, record_id: uuid.UUID) -> None:
        """Delete a record.

        Raises:
            RecordNotFoundError: if no record with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM medical_records WHERE id = %s", (record_id,))
                if cur.rowcount == 0:
                    raise RecordNotFoundError(f"Record {record_id} not found")
            conn.commit()

    def update_title(self, record_id: uuid.UUID, title: str) -> None:
        """Rename a record. Blank titles are rejected.

        Raises:
            RecordNotFoundError: if no record with this ID exists.
        """
        title = title.strip()
        if not title:
            raise ValueError("Record title must not be blank")
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "UPDATE medical_records SET title = %s WHERE id = %s",
                    (title, record_id),
                )
                if cur.rowcount == 0:
                    raise RecordNotFoundError(f"Record {record_id} not found")
            conn.commit()

    def find_by_id(self, record_id: uuid.UUID) -> MedicalRecord:
        """Find a record by ID.

        Raises:
            RecordNotFoundError: if no record with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM medical_records WHERE id = %s",
                    (record_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise RecordNotFoundError(f"Record {record_id} not found")
        return self._to_record(row)

    def list_for_owner(self, owner_email: str, search: str | None = None) -> list[MedicalRecord]:
        """List an owner's records, newest first.

        *search* matches the title case-insensitively or the creation date
        rendered as e.g. ``2025-08-14`` or ``August 14, 2025``.
        """
        query = f"SELECT {_COLUMNS} FROM medical_records WHERE owner_email = %s"
        params: list[Any] = [owner_email.lower()]
        search = (search or "").strip()
        if search:
            query += """
                AND (
                    title ILIKE %s ESCAPE '\\'
                    OR to_char(created_at, 'YYYY-MM-DD') ILIKE %s ESCAPE '\\'
                    OR to_char(created_at, 'FMMonth FMDD, YYYY') ILIKE %s ESCAPE '\\'
                )
            """
            pattern = f"%{_escape_like(search)}%"
            params.extend([pattern, pattern, pattern])
        query += " ORDER BY created_at DESC"

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> MedicalRecord:
        pdf_data = row["pdf_data"]
        return MedicalRecord(
            id=row["id"],
            created_at=row["created_at"],
            title=row["title"],
            ocr_text=row["ocr_text"],
            summary=row["summary"],
            pdf_data=bytes(pdf_data) if pdf_data is not None else None,
            page_count=row["page_count"],
            owner_email=row["owner_email"],
        )


def _escape_like(text: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
