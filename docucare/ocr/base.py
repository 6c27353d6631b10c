from abc import ABC, abstractmethod

from PIL import Image

from docucare.ocr.models import TextObservation


class BaseTextRecognitionEngine(ABC):
    """Contract for platform OCR engines."""

    @abstractmethod
    def observe(self, image: Image.Image) -> list[TextObservation]:
        """Recognize text lines on a decoded image.

        Args:
            image: Decoded raster page.

        Returns:
            One observation per text line, boxes normalized to [0, 1]
            with the origin at the bottom-left corner.

        Raises:
            RecognitionError: if the engine fails for any reason.
        """
