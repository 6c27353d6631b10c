import io
from pathlib import Path

from PIL import Image, ImageOps

from docucare.logging.logger import Log
from docucare.pdf.base import BasePdfRasterizer
from docucare.pdf.exceptions import PdfRasterizationError
from docucare.processor.exceptions import NoSupportedInputError

_PDF_MAGIC = b"%PDF"


class ScanLoader:
    """Turns imported image and PDF files into page images."""

    def __init__(self, rasterizer: BasePdfRasterizer) -> None:
        self._rasterizer = rasterizer

    def load(self, paths: list[Path]) -> list[Image.Image]:
        """Load every page from *paths*, in order.

        Unreadable or unsupported files are skipped.

        Raises:
            NoSupportedInputError: if no file yields a page.
        """
        pages: list[Image.Image] = []
        for path in paths:
            pages.extend(self._load_file(path))
        if not pages:
            raise NoSupportedInputError("No supported images or PDFs found in selected files.")
        Log.info(f"Loaded {len(pages)} pages from {len(paths)} files")
        return pages

    def _load_file(self, path: Path) -> list[Image.Image]:
        try:
            data = path.read_bytes()
        except OSError as exc:
            Log.warning(f"Skipping unreadable file {path}: {exc}")
            return []

        if data.startswith(_PDF_MAGIC):
            try:
                return self._rasterizer.rasterize(data)
            except PdfRasterizationError as exc:
                Log.warning(f"Skipping PDF {path}: {exc}")
                return []

        try:
            with Image.open(io.BytesIO(data)) as image:
                return [ImageOps.exif_transpose(image)]
        except (OSError, ValueError) as exc:
            Log.warning(f"Skipping unsupported file {path}: {exc}")
            return []
