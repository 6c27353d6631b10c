from PIL import Image

from docucare.logging.logger import Log
from docucare.ocr.base import BaseTextRecognitionEngine
from docucare.ocr.exceptions import RecognitionError
from docucare.ocr.models import BoundingBox, RecognizedLine, TextObservation

PAGE_BREAK = "\n\n— Page Break —\n\n"


class Recognizer:
    """Runs an OCR engine and maps its output into image pixel space."""

    def __init__(self, engine: BaseTextRecognitionEngine) -> None:
        self._engine = engine

    def recognize(self, image: Image.Image) -> list[RecognizedLine]:
        """Recognize text lines on one page.

        Returns an empty list when the image cannot be decoded.

        Raises:
            RecognitionError: if the engine fails.
        """
        try:
            image.load()
        except (OSError, ValueError) as exc:
            Log.warning(f"Skipping OCR for undecodable image: {exc}")
            return []

        width, height = image.size
        if width == 0 or height == 0:
            return []

        observations = self._engine.observe(image)
        return [self._to_pixel_line(obs, width, height) for obs in observations]

    def recognize_batch(self, images: list[Image.Image]) -> tuple[str, list[str]]:
        """Recognize every page and build the transcript.

        A page whose recognition raises is left out of the transcript.

        Returns:
            (transcript, per_page_texts) in page order.
        """
        per_page: list[str] = []
        for index, image in enumerate(images):
            try:
                lines = self.recognize(image)
            except RecognitionError as exc:
                Log.warning(f"OCR failed on page {index + 1}, omitting from transcript: {exc}")
                continue
            per_page.append("\n".join(line.text for line in lines))
        return PAGE_BREAK.join(per_page), per_page

    @staticmethod
    def _to_pixel_line(obs: TextObservation, width: int, height: int) -> RecognizedLine:
        norm = obs.box
        return RecognizedLine(
            text=obs.text,
            box=BoundingBox(
                x=norm.x * width,
                y=(1 - norm.y - norm.height) * height,
                width=norm.width * width,
                height=norm.height * height,
            ),
        )
