from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Contract for all OCR text extraction adapters."""

    @abstractmethod
    def extract(self, image_bytes: bytes) -> str:
        """Transcribe all text found in a preprocessed image.

        Args:
            image_bytes: JPEG produced by the image preprocessor.

        Returns:
            The full-page transcript, stripped.

        Raises:
            NoTextDetectedError: if the backend found no text.
            ExtractionServiceError: on backend or transport failure.
        """
