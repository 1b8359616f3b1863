class ExtractionError(Exception):
    """Base exception for OCR text extraction failures."""


class ExtractionServiceError(ExtractionError):
    """Raised when the OCR backend fails, times out, or cannot be reached."""


class NoTextDetectedError(ExtractionError):
    """Raised when the OCR backend finds no text in the image."""
