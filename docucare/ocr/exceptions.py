class RecognitionError(Exception):
    """Raised when the OCR engine fails on an image."""
