from abc import ABC, abstractmethod

from docucare.summarization.models import EncodedImage


class BaseGenerativeClient(ABC):
    """Contract for provider-specific generative AI clients."""

    @abstractmethod
    def generate(
        self,
        *,
        system_instruction: str,
        text: str,
        images: list[EncodedImage],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Return the model output as trimmed, non-empty plain text.

        Raises:
            MissingCredentialError: if no credential is configured.
            InvalidResponseError: on non-2xx status or undecodable body.
            EmptyOutputError: if the response carries no usable text.
            SummarizationNetworkError: on connection failures or timeouts.
        """

    def close(self) -> None:
        """Release the underlying connection pool, if any."""
