"""Example OCR adapter.

Use this module as a reference when implementing new OCR backends.
Implement BaseTextExtractor and register the engine in TextExtractorFactory.
"""

from typing import ClassVar

from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.ocr.exceptions import NoTextDetectedError


class ExampleOcrAdapter(BaseTextExtractor):
    """Returns a fixed Aadhaar-style transcript without looking at the image.

    No external calls. Useful for local development of the upload flow.
    """

    DEFAULT_TEXT: ClassVar[str] = (
        "Government of India\n"
        "Name: Asha Verma\n"
        "DOB: 14/02/1991\n"
        "Gender: Female\n"
        "4821 7765 3019"
    )

    def __init__(self, text: str | None = None) -> None:
        self._text = self.DEFAULT_TEXT if text is None else text

    def extract(self, image_bytes: bytes) -> str:
        _ = image_bytes
        if not self._text.strip():
            raise NoTextDetectedError("No text detected in the image.")
        return self._text.strip()
