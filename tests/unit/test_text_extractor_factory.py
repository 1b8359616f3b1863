import pytest

from kycdoc.config.settings import Settings
from kycdoc.ocr.example_adapter import ExampleOcrAdapter
from kycdoc.ocr.factory import TextExtractorFactory
from kycdoc.ocr.openai_vision_adapter import OpenAIVisionAdapter
from kycdoc.ocr.tesseract_adapter import TesseractAdapter


class TestTextExtractorFactory:
    def test_creates_tesseract_adapter(self) -> None:
        adapter = TextExtractorFactory.create(Settings(ocr_engine="tesseract"))
        assert isinstance(adapter, TesseractAdapter)

    def test_creates_example_adapter(self) -> None:
        adapter = TextExtractorFactory.create(Settings(ocr_engine="example"))
        assert isinstance(adapter, ExampleOcrAdapter)

    def test_creates_openai_adapter_with_key(self) -> None:
        adapter = TextExtractorFactory.create(
            Settings(ocr_engine="openai", openai_api_key="sk-test")
        )
        assert isinstance(adapter, OpenAIVisionAdapter)

    def test_openai_without_key_raises(self) -> None:
        with pytest.raises(ValueError, match="openai_api_key"):
            TextExtractorFactory.create(Settings(ocr_engine="openai", openai_api_key=""))

    def test_is_case_insensitive(self) -> None:
        adapter = TextExtractorFactory.create(Settings(ocr_engine="Tesseract"))
        assert isinstance(adapter, TesseractAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown OCR engine"):
            TextExtractorFactory.create(Settings(ocr_engine="abbyy"))
