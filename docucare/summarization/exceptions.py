class SummarizationError(Exception):
    """Raised when summarization fails."""


class InvalidResponseError(SummarizationError):
    """Raised when the provider answers with a non-2xx status or an undecodable body."""


class EmptyOutputError(SummarizationError):
    """Raised when the provider response contains no usable text."""


class MissingCredentialError(SummarizationError):
    """Raised when no API credential is configured for the provider."""


class SummarizationNetworkError(SummarizationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
