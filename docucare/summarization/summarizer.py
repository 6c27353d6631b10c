"""AI-powered report summarizer."""

from PIL import Image

from docucare.logging.logger import Log
from docucare.summarization.client_base import BaseGenerativeClient
from docucare.summarization.image_codec import encode_jpeg
from docucare.summarization.prompt_loader import QUESTION_PROMPT, SUMMARY_PROMPT, load_prompt


class Summarizer:
    """Sends text and optional page images to a generative model."""

    def __init__(
        self,
        *,
        client: BaseGenerativeClient,
        temperature: float = 0.2,
        max_output_tokens: int = 500,
        image_quality: int = 90,
        summary_instruction: str | None = None,
        question_instruction: str | None = None,
    ) -> None:
        self._client = client
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_output_tokens = max_output_tokens
        self._image_quality = image_quality
        self._summary_instruction = (
            summary_instruction if summary_instruction is not None else load_prompt(SUMMARY_PROMPT)
        )
        self._question_instruction = (
            question_instruction
            if question_instruction is not None
            else load_prompt(QUESTION_PROMPT)
        )

    def summarize(
        self,
        text: str,
        system_instruction: str | None = None,
        images: list[Image.Image] | None = None,
    ) -> str:
        """Summarize report text, attaching each image individually."""
        encoded = [encode_jpeg(image, self._image_quality) for image in images or []]
        Log.info(f"Requesting summary for {len(text)} chars and {len(encoded)} images")
        output = self._client.generate(
            system_instruction=system_instruction or self._summary_instruction,
            text=text,
            images=encoded,
            temperature=self._temperature,
            max_output_tokens=self._max_output_tokens,
        )
        Log.debug(f"AI raw summary:\n{output}")
        return output

    def answer(self, question: str, system_instruction: str | None = None) -> str:
        """Answer a free-form medical question without attachments."""
        return self._client.generate(
            system_instruction=system_instruction or self._question_instruction,
            text=question,
            images=[],
            temperature=self._temperature,
            max_output_tokens=self._max_output_tokens,
        )

    def close(self) -> None:
        self._client.close()
