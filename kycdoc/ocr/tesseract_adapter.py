import io

import pytesseract
from PIL import Image

from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.ocr.exceptions import ExtractionServiceError, NoTextDetectedError


class TesseractAdapter(BaseTextExtractor):
    """Extracts text with the local Tesseract binary via pytesseract."""

    def __init__(self, languages: str = "eng+hin", timeout_seconds: int = 30) -> None:
        self._languages = languages
        self._timeout_seconds = timeout_seconds

    def extract(self, image_bytes: bytes) -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                text = pytesseract.image_to_string(
                    image,
                    lang=self._languages,
                    timeout=self._timeout_seconds,
                )
        except Exception as exc:
            raise ExtractionServiceError(f"tesseract extraction failed: {exc}") from exc

        text = text.strip()
        if not text:
            raise NoTextDetectedError(
                "No text detected in the image. Please ensure the document is clear and readable."
            )
        return text
