from kycdoc.config.settings import Settings
from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.ocr.example_adapter import ExampleOcrAdapter
from kycdoc.ocr.openai_vision_adapter import OpenAIVisionAdapter
from kycdoc.ocr.tesseract_adapter import TesseractAdapter


class TextExtractorFactory:
    """Creates the OCR adapter selected by ``settings.ocr_engine``."""

    ENGINES: tuple[str, ...] = ("tesseract", "openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.ocr_engine.lower()
        if engine == "tesseract":
            return TesseractAdapter(
                languages=settings.ocr_languages,
                timeout_seconds=settings.ocr_timeout_seconds,
            )
        if engine == "openai":
            if not settings.openai_api_key:
                raise ValueError("openai_api_key is required for ocr_engine=openai")
            return OpenAIVisionAdapter(
                api_key=settings.openai_api_key,
                model=settings.openai_model_name,
                timeout_seconds=settings.openai_timeout_seconds,
                base_url=settings.openai_base_url,
            )
        if engine == "example":
            return ExampleOcrAdapter()
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}")
