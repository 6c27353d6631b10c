"""Tesseract-backed OCR engine.

Tesseract reports word boxes in pixels with a top-left origin. Words are
grouped into lines by (block, paragraph, line) and each line box is the union
of its word boxes, reported normalized with a bottom-left origin so every
engine speaks the same coordinate contract.
"""

from dataclasses import dataclass, field

import pytesseract
from PIL import Image

from docucare.ocr.base import BaseTextRecognitionEngine
from docucare.ocr.exceptions import RecognitionError
from docucare.ocr.models import BoundingBox, TextObservation

_TESSERACT_MODES = ("1", "L", "RGB", "RGBA")


@dataclass
class _LineAccumulator:
    words: list[str] = field(default_factory=list)
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    def add(self, word: str, left: int, top: int, width: int, height: int) -> None:
        if not self.words:
            self.left, self.top = left, top
            self.right, self.bottom = left + width, top + height
        else:
            self.left = min(self.left, left)
            self.top = min(self.top, top)
            self.right = max(self.right, left + width)
            self.bottom = max(self.bottom, top + height)
        self.words.append(word)


class TesseractEngine(BaseTextRecognitionEngine):
    """Line-level OCR via pytesseract in LSTM mode with dictionary correction."""

    def __init__(self, languages: str = "eng", engine_mode: int = 1) -> None:
        self._languages = languages
        self._config = f"--oem {engine_mode} --psm 3"

    def observe(self, image: Image.Image) -> list[TextObservation]:
        # pytesseract hands the page over as PNG
        if image.mode not in _TESSERACT_MODES:
            image = image.convert("RGB")
        try:
            data = pytesseract.image_to_data(
                image,
                lang=self._languages,
                config=self._config,
                output_type=pytesseract.Output.DICT,
            )
        except (
            pytesseract.TesseractError,
            pytesseract.TesseractNotFoundError,
            RuntimeError,
            OSError,
            TypeError,
        ) as exc:
            raise RecognitionError(f"tesseract recognition failed: {exc}") from exc

        lines = self._group_lines(data)
        width, height = image.size
        return [
            TextObservation(
                text=" ".join(acc.words),
                box=self._normalize(acc, width, height),
            )
            for acc in lines
        ]

    @staticmethod
    def _group_lines(data: dict[str, list]) -> list[_LineAccumulator]:
        lines: dict[tuple[int, int, int], _LineAccumulator] = {}
        for i, raw_word in enumerate(data["text"]):
            word = str(raw_word).strip()
            if not word or float(data["conf"][i]) < 0:
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(key, _LineAccumulator()).add(
                word,
                int(data["left"][i]),
                int(data["top"][i]),
                int(data["width"][i]),
                int(data["height"][i]),
            )
        return list(lines.values())

    @staticmethod
    def _normalize(acc: _LineAccumulator, width: int, height: int) -> BoundingBox:
        return BoundingBox(
            x=acc.left / width,
            y=1 - acc.bottom / height,
            width=(acc.right - acc.left) / width,
            height=(acc.bottom - acc.top) / height,
        )
