"""Example generative client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGenerativeClient and register the provider in SummarizerFactory.
"""

from typing import ClassVar

from docucare.summarization.client_base import BaseGenerativeClient
from docucare.summarization.models import EncodedImage


class ExampleClientAdapter(BaseGenerativeClient):
    """Example adapter that returns a fixed summary.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[str] = (
        "Routine Blood Panel\n"
        "\n"
        "Your blood counts are within the usual range.\n"
        "Nothing in this report points to an urgent problem."
    )

    def generate(
        self,
        *,
        system_instruction: str,
        text: str,
        images: list[EncodedImage],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        _ = system_instruction, text, images, temperature, max_output_tokens
        return self.DEFAULT_RESPONSE
