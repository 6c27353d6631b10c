import pymupdf
from PIL import Image

from docucare.pdf.base import BasePdfRasterizer
from docucare.pdf.exceptions import PdfRasterizationError


class PyMuPdfAdapter(BasePdfRasterizer):
    """Renders PDF pages using PyMuPDF."""

    def rasterize(self, pdf_bytes: bytes) -> list[Image.Image]:
        try:
            images: list[Image.Image] = []
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                for page in doc:
                    zoom = self._fit_scale(page.rect.width, page.rect.height)
                    pix = page.get_pixmap(matrix=pymupdf.Matrix(zoom, zoom), alpha=False)
                    images.append(
                        Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
                    )
            return images
        except PdfRasterizationError:
            raise
        except Exception as exc:
            raise PdfRasterizationError(f"pymupdf rendering failed: {exc}") from exc
