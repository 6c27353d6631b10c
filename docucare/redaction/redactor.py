import math

from PIL import Image, ImageDraw

from docucare.ocr.models import BoundingBox


class Redactor:
    """Paints opaque black boxes over regions of a page image."""

    FILL = "black"

    def redact(self, image: Image.Image, boxes: list[BoundingBox]) -> Image.Image:
        """Return a copy of *image* with every box filled black.

        The input image is never modified. Boxes are clamped to the image
        bounds; empty boxes are ignored.
        """
        if image.mode in ("1", "P"):
            redacted = image.convert("RGB")
        else:
            redacted = image.copy()

        draw = ImageDraw.Draw(redacted)
        width, height = redacted.size
        for box in boxes:
            rect = self._clamp(box, width, height)
            if rect is not None:
                draw.rectangle(rect, fill=self.FILL)
        return redacted

    @staticmethod
    def _clamp(box: BoundingBox, width: int, height: int) -> tuple[int, int, int, int] | None:
        if box.is_empty:
            return None
        left = max(0, math.floor(box.x))
        top = max(0, math.floor(box.y))
        # ImageDraw.rectangle includes the right/bottom edge
        right = min(width, math.ceil(box.x + box.width)) - 1
        bottom = min(height, math.ceil(box.y + box.height)) - 1
        if right < left or bottom < top:
            return None
        return left, top, right, bottom
