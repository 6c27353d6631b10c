import uuid
from datetime import datetime, timedelta, timezone

import pytest

from docucare.database.repositories.record_repository import RecordRepository
from docucare.processor.exceptions import RecordNotFoundError
from docucare.processor.models import MedicalRecord

pytestmark = pytest.mark.usefixtures("integration_cleanup")


def _record(owner_email: str, title: str, created_at: datetime | None = None) -> MedicalRecord:
    return MedicalRecord(
        title=title,
        ocr_text="Finding 1 normal",
        owner_email=owner_email,
        summary="All values normal.",
        pdf_data=b"%PDF-1.7 fake",
        page_count=1,
        created_at=created_at or datetime.now(timezone.utc),
    )


class TestRecordRepository:
    def test_insert_and_find_round_trip(self, owner_email: str) -> None:
        repo = RecordRepository()
        record = _record(owner_email, "Blood Panel")

        repo.insert(record)
        stored = repo.find_by_id(record.id)

        assert stored.id == record.id
        assert stored.title == "Blood Panel"
        assert stored.summary == "All values normal."
        assert stored.pdf_data == b"%PDF-1.7 fake"
        assert stored.page_count == 1
        assert stored.owner_email == owner_email

    def test_find_missing_raises(self, owner_email: str) -> None:
        with pytest.raises(RecordNotFoundError):
            RecordRepository().find_by_id(uuid.uuid4())

    def test_list_is_newest_first_and_scoped_to_owner(self, owner_email: str) -> None:
        repo = RecordRepository()
        now = datetime.now(timezone.utc)
        older = _record(owner_email, "Lipid Panel", now - timedelta(days=2))
        newer = _record(owner_email, "Thyroid Panel", now)
        repo.insert(older)
        repo.insert(newer)

        records = repo.list_for_owner(owner_email.upper())

        assert [r.id for r in records] == [newer.id, older.id]
        assert repo.list_for_owner(f"other-{owner_email}") == []

    def test_search_matches_title_or_date(self, owner_email: str) -> None:
        repo = RecordRepository()
        dated = _record(owner_email, "Kidney Function", datetime(2024, 3, 9, 12, tzinfo=timezone.utc))
        other = _record(owner_email, "Blood Panel", datetime(2024, 5, 1, 12, tzinfo=timezone.utc))
        repo.insert(dated)
        repo.insert(other)

        assert [r.id for r in repo.list_for_owner(owner_email, search="blood")] == [other.id]
        assert [r.id for r in repo.list_for_owner(owner_email, search="2024-03")] == [dated.id]
        assert len(repo.list_for_owner(owner_email, search="  ")) == 2

    def test_search_treats_wildcards_literally(self, owner_email: str) -> None:
        repo = RecordRepository()
        discount = _record(owner_email, "Copay 50% covered")
        plain = _record(owner_email, "Result 500 units")
        repo.insert(discount)
        repo.insert(plain)

        assert [r.id for r in repo.list_for_owner(owner_email, search="50%")] == [discount.id]
        assert repo.list_for_owner(owner_email, search="result_500") == []

    def test_update_title(self, owner_email: str) -> None:
        repo = RecordRepository()
        record = _record(owner_email, "Blood Panel")
        repo.insert(record)

        repo.update_title(record.id, "  Iron Levels ")

        assert repo.find_by_id(record.id).title == "Iron Levels"

    def test_update_title_rejects_blank(self, owner_email: str) -> None:
        repo = RecordRepository()
        record = _record(owner_email, "Blood Panel")
        repo.insert(record)

        with pytest.raises(ValueError):
            repo.update_title(record.id, "   ")
        assert repo.find_by_id(record.id).title == "Blood Panel"

    def test_delete(self, owner_email: str) -> None:
        repo = RecordRepository()
        record = _record(owner_email, "Blood Panel")
        repo.insert(record)

        repo.delete(record.id)

        with pytest.raises(RecordNotFoundError):
            repo.find_by_id(record.id)
        with pytest.raises(RecordNotFoundError):
            repo.delete(record.id)
