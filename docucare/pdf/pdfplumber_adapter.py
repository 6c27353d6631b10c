import io

import pdfplumber
from PIL import Image

from docucare.pdf.base import BasePdfRasterizer
from docucare.pdf.exceptions import PdfRasterizationError

_POINTS_PER_INCH = 72


class PdfPlumberAdapter(BasePdfRasterizer):
    """Renders PDF pages using pdfplumber."""

    def rasterize(self, pdf_bytes: bytes) -> list[Image.Image]:
        try:
            images: list[Image.Image] = []
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                for page in pdf.pages:
                    scale = self._fit_scale(float(page.width), float(page.height))
                    rendered = page.to_image(resolution=_POINTS_PER_INCH * scale)
                    image = rendered.original.convert("RGB")
                    image.thumbnail((self._max_width, self._max_height))
                    images.append(image)
            return images
        except PdfRasterizationError:
            raise
        except Exception as exc:
            raise PdfRasterizationError(f"pdfplumber rendering failed: {exc}") from exc
