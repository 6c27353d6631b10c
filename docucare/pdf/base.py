from abc import ABC, abstractmethod

from PIL import Image


class BasePdfRasterizer(ABC):
    """Contract for all PDF-to-image adapters."""

    def __init__(self, max_width: int = 1200, max_height: int = 1550) -> None:
        self._max_width = max_width
        self._max_height = max_height

    @abstractmethod
    def rasterize(self, pdf_bytes: bytes) -> list[Image.Image]:
        """Render every PDF page to an RGB image.

        Each page is scaled to fit within (max_width, max_height), keeping
        its aspect ratio.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One image per page, in page order.

        Raises:
            PdfRasterizationError: if rendering fails for any reason.
        """

    def _fit_scale(self, page_width: float, page_height: float) -> float:
        return min(self._max_width / page_width, self._max_height / page_height)
