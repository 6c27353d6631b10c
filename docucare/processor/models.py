import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class MedicalRecord:
    """A finished, redacted and summarized scan batch."""

    title: str
    ocr_text: str
    owner_email: str
    summary: str | None = None
    pdf_data: bytes | None = None
    page_count: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
