import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from PIL import Image

from docucare.processor.exceptions import BatchCancelledError
from docucare.processor.models import MedicalRecord
from docucare.summarization.models import SummaryResult


class BatchState(str, Enum):
    RECEIVED = "received"
    REDACTING = "redacting"
    ASSEMBLING = "assembling"
    TRANSCRIBING = "transcribing"
    SUMMARIZING = "summarizing"
    PARSING = "parsing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    images: list[Image.Image]
    owner_email: str
    cancel_event: threading.Event | None = None
    state: BatchState = BatchState.RECEIVED
    redacted_images: list[Image.Image] = field(default_factory=list)
    page_numbers: list[int] = field(default_factory=list)  # 1-based input page of each redacted image
    dropped_pages: list[int] = field(default_factory=list)
    pdf_data: bytes | None = None
    transcript: str = ""
    page_texts: list[str] = field(default_factory=list)
    summary_output: str = ""
    summary: SummaryResult | None = None
    record: MedicalRecord | None = None
    error_message: str = ""

    def raise_if_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise BatchCancelledError(f"Batch cancelled while {self.state.value}")


class PipelineStep(ABC):
    # None leaves the batch in the state of the previous step
    state: ClassVar[BatchState | None] = None
    cancellable: ClassVar[bool] = True

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step."""
