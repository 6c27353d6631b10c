import io
from dataclasses import dataclass

import pymupdf
from PIL import Image

from docucare.logging.logger import Log


@dataclass(frozen=True)
class AssembledDocument:
    """PDF bytes plus the input indices that became its pages, in order."""

    data: bytes
    page_indices: list[int]


class PageAssembler:
    """Builds a paginated PDF from page images, one page per image."""

    def assemble(self, images: list[Image.Image]) -> AssembledDocument | None:
        """Serialize *images* into a single PDF in input order.

        Pages that cannot be encoded are skipped; ``page_indices`` says which
        inputs made it in.

        Returns:
            The document, or None if no page could be added.
        """
        doc = pymupdf.open()
        kept: list[int] = []
        try:
            for index, image in enumerate(images):
                if image.width == 0 or image.height == 0:
                    Log.warning("Skipping empty page in document", page=index + 1)
                    continue
                try:
                    page_bytes = self._encode_page(image)
                except Exception as exc:
                    Log.warning(f"Skipping page in document: {exc}", page=index + 1)
                    continue
                page = doc.new_page(width=image.width, height=image.height)
                page.insert_image(page.rect, stream=page_bytes)
                kept.append(index)
            if not kept:
                return None
            Log.debug("Assembled PDF", pages=len(kept))
            return AssembledDocument(data=doc.tobytes(), page_indices=kept)
        finally:
            doc.close()

    @staticmethod
    def _encode_page(image: Image.Image) -> bytes:
        if image.mode not in ("1", "L", "P", "RGB", "RGBA"):
            image = image.convert("RGB")
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()
