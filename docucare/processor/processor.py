import threading
from collections.abc import Sequence

from PIL import Image

from docucare.config.settings import Settings
from docucare.database.repositories.record_repository import RecordRepository
from docucare.logging.logger import Log
from docucare.ocr.recognizer import Recognizer
from docucare.ocr.tesseract_engine import TesseractEngine
from docucare.pdf.assembler import PageAssembler
from docucare.processor.exceptions import BatchProcessingError
from docucare.processor.models import MedicalRecord
from docucare.processor.pipeline import BatchState, PipelineContext, PipelineStep
from docucare.processor.steps import (
    AssembleDocumentStep,
    BuildRecordStep,
    MarkFailedStep,
    ParseSummaryStep,
    RedactPagesStep,
    SummarizeStep,
    TranscribeStep,
)
from docucare.redaction.classifier import PIIClassifier
from docucare.redaction.redactor import Redactor
from docucare.summarization.factory import SummarizerFactory


class Processor:
    """Orchestrates the scan intake pipeline.

    Pipeline: redact pages -> assemble PDF -> transcribe -> summarize ->
    parse -> build record -> persist. A batch is atomic: the record is
    inserted once, after every step has succeeded.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
        record_repo: RecordRepository | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step
        self._record_repo = record_repo

    def process(
        self,
        images: Sequence[Image.Image],
        owner_email: str,
        cancel_event: threading.Event | None = None,
    ) -> MedicalRecord:
        """Run the full pipeline for one batch of page images.

        Raises:
            BatchProcessingError: if any step fails; nothing is persisted.
        """
        if not images:
            raise BatchProcessingError(BatchState.RECEIVED, "Batch contains no pages")

        context = PipelineContext(
            images=list(images),
            owner_email=owner_email,
            cancel_event=cancel_event,
        )
        Log.info("Processing batch", pages=len(context.images))

        try:
            for step in self._steps:
                if step.cancellable:
                    context.raise_if_cancelled()
                if step.state is not None:
                    context.state = step.state
                context = step.run(context)
        except Exception as exc:
            failed_state = context.state
            context.error_message = str(exc)
            context.state = BatchState.FAILED
            self._failed_step.run(context)
            raise BatchProcessingError(failed_state, str(exc)) from exc

        if context.record is None:
            raise ValueError("Pipeline finished without building a record")
        context.state = BatchState.COMPLETED

        if self._record_repo is not None:
            self._record_repo.insert(context.record)
            Log.info("Stored record", record_id=context.record.id, pages=context.record.page_count)
        return context.record

    def close(self) -> None:
        """Close every step, e.g. the summarizer's HTTP client."""
        for step in [*self._steps, self._failed_step]:
            step.close()


def build_processor(
    settings: Settings,
    record_repo: RecordRepository | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    recognizer = Recognizer(
        TesseractEngine(
            languages=settings.ocr_languages,
            engine_mode=settings.ocr_engine_mode,
        )
    )
    summarizer = SummarizerFactory.create(settings)
    steps: list[PipelineStep] = [
        RedactPagesStep(
            recognizer=recognizer,
            classifier=PIIClassifier(),
            redactor=Redactor(),
            max_workers=settings.max_page_workers,
        ),
        AssembleDocumentStep(assembler=PageAssembler()),
        TranscribeStep(recognizer=recognizer),
        SummarizeStep(
            summarizer=summarizer,
            max_transcript_chars=settings.max_transcript_chars,
        ),
        ParseSummaryStep(),
        BuildRecordStep(),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(), record_repo=record_repo)
