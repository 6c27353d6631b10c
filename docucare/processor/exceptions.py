from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docucare.processor.pipeline import BatchState


class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class NoSupportedInputError(ProcessorError):
    """Raised when none of the selected files yields a page image."""


class PageAssemblyError(ProcessorError):
    """Raised when no redacted page could be assembled into the document."""


class BatchCancelledError(ProcessorError):
    """Raised when a batch is abandoned before summarization."""


class RecordNotFoundError(ProcessorError):
    """Raised when a medical record cannot be found in the database."""


class BatchProcessingError(ProcessorError):
    """Raised once per failed batch, carrying the state it failed in."""

    def __init__(self, state: "BatchState", message: str) -> None:
        super().__init__(message)
        self.state = state
