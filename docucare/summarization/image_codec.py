import base64
import io

from PIL import Image

from docucare.summarization.models import EncodedImage

JPEG_MIME_TYPE = "image/jpeg"


def encode_jpeg(image: Image.Image, quality: int = 90) -> EncodedImage:
    """Re-encode *image* as base64 JPEG for an inline request part."""
    if image.mode != "RGB":
        image = image.convert("RGB")
    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=quality)
    return EncodedImage(
        mime_type=JPEG_MIME_TYPE,
        data=base64.b64encode(buf.getvalue()).decode("ascii"),
    )
