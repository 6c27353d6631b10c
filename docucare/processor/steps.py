import os
from concurrent.futures import ThreadPoolExecutor

from PIL import Image

from docucare.logging.logger import Log
from docucare.ocr.exceptions import RecognitionError
from docucare.ocr.recognizer import Recognizer
from docucare.pdf.assembler import PageAssembler
from docucare.processor.exceptions import PageAssemblyError
from docucare.processor.models import MedicalRecord
from docucare.processor.pipeline import BatchState, PipelineContext, PipelineStep
from docucare.redaction.classifier import PIIClassifier
from docucare.redaction.redactor import Redactor
from docucare.summarization.response_parser import parse_summary
from docucare.summarization.summarizer import Summarizer


class MarkFailedStep(PipelineStep):
    state = BatchState.FAILED
    cancellable = False

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(
            f"Batch failed: {context.error_message}",
            pages=len(context.images),
            redacted=len(context.redacted_images),
        )
        return context


class RedactPagesStep(PipelineStep):
    """Recognize, classify and redact every page concurrently.

    Each task writes only its own slot of a pre-sized result list, so results
    come back in page order whatever order the tasks finish in. A page whose
    recognition fails is dropped rather than passed through unredacted.
    """

    state = BatchState.REDACTING

    def __init__(
        self,
        recognizer: Recognizer,
        classifier: PIIClassifier,
        redactor: Redactor,
        max_workers: int = 0,
    ) -> None:
        self._recognizer = recognizer
        self._classifier = classifier
        self._redactor = redactor
        self._max_workers = max_workers or os.cpu_count() or 1

    def run(self, context: PipelineContext) -> PipelineContext:
        pages = context.images
        slots: list[Image.Image | None] = [None] * len(pages)
        workers = max(1, min(len(pages), self._max_workers))

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="page")
        try:
            futures = [
                executor.submit(self._process_page, context, index, image, slots)
                for index, image in enumerate(pages)
            ]
            for future in futures:
                future.result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        context.redacted_images = [image for image in slots if image is not None]
        context.page_numbers = [index + 1 for index, image in enumerate(slots) if image is not None]
        context.dropped_pages = [index + 1 for index, image in enumerate(slots) if image is None]
        Log.info(
            "Redacted batch",
            kept=len(context.redacted_images),
            dropped=context.dropped_pages,
        )
        return context

    def _process_page(
        self,
        context: PipelineContext,
        index: int,
        image: Image.Image,
        slots: list[Image.Image | None],
    ) -> None:
        context.raise_if_cancelled()
        try:
            lines = self._recognizer.recognize(image)
        except RecognitionError as exc:
            Log.warning(f"Dropping page {index + 1}: {exc}")
            return
        boxes = self._classifier.classify(lines)
        try:
            slots[index] = self._redactor.redact(image, boxes)
        except (OSError, ValueError) as exc:
            Log.warning(f"Dropping page {index + 1}, redaction failed: {exc}")
            return
        Log.debug("Page redacted", page=index + 1, lines=len(lines), boxes=len(boxes))


class AssembleDocumentStep(PipelineStep):
    state = BatchState.ASSEMBLING

    def __init__(self, assembler: PageAssembler) -> None:
        self._assembler = assembler

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._assembler.assemble(context.redacted_images)
        if document is None:
            raise PageAssemblyError("No pages could be added to the document")

        # later steps must see exactly the pages the artifact holds
        kept = document.page_indices
        numbers = context.page_numbers or list(range(1, len(context.redacted_images) + 1))
        skipped = [number for index, number in enumerate(numbers) if index not in kept]
        context.redacted_images = [context.redacted_images[index] for index in kept]
        context.page_numbers = [numbers[index] for index in kept]
        context.dropped_pages = sorted(context.dropped_pages + skipped)
        context.pdf_data = document.data
        Log.info(
            "Assembled document",
            size=len(document.data),
            pages=len(kept),
            skipped=skipped,
        )
        return context


class TranscribeStep(PipelineStep):
    state = BatchState.TRANSCRIBING

    def __init__(self, recognizer: Recognizer) -> None:
        self._recognizer = recognizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.transcript, context.page_texts = self._recognizer.recognize_batch(
            context.redacted_images
        )
        Log.info(
            f"Transcribed {len(context.page_texts)} pages, {len(context.transcript)} chars"
        )
        return context


class SummarizeStep(PipelineStep):
    state = BatchState.SUMMARIZING

    def __init__(self, summarizer: Summarizer, max_transcript_chars: int = 25_000) -> None:
        self._summarizer = summarizer
        self._max_transcript_chars = max_transcript_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        clipped = context.transcript[: self._max_transcript_chars]
        context.summary_output = self._summarizer.summarize(
            clipped,
            images=context.redacted_images,
        )
        return context

    def close(self) -> None:
        self._summarizer.close()


class ParseSummaryStep(PipelineStep):
    state = BatchState.PARSING
    cancellable = False

    def run(self, context: PipelineContext) -> PipelineContext:
        context.summary = parse_summary(context.summary_output)
        Log.info(f"Parsed summary titled '{context.summary.title}'")
        return context


class BuildRecordStep(PipelineStep):
    """Turns the parsed summary into a record; runs under the parsing state."""

    cancellable = False

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.summary is None:
            raise ValueError("PipelineContext.summary must be set before building the record")
        context.record = MedicalRecord(
            title=context.summary.title,
            ocr_text=context.transcript,
            owner_email=context.owner_email.lower(),
            summary=context.summary.body or None,
            pdf_data=context.pdf_data,
            page_count=len(context.redacted_images),
        )
        return context
