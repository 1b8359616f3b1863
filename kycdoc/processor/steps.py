from kycdoc.imaging.preprocessor import ImagePreprocessor
from kycdoc.logging.logger import Log
from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.parsing.field_parser import FieldParser
from kycdoc.processor.models import ProcessingStage
from kycdoc.processor.pipeline import PipelineContext, PipelineStep
from kycdoc.validation.validator import KycValidator


class PreprocessImageStep(PipelineStep):
    stage = ProcessingStage.EXTRACTING
    message = "Extracting text from document..."

    def __init__(self, preprocessor: ImagePreprocessor) -> None:
        self._preprocessor = preprocessor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.processed_bytes = self._preprocessor.process(context.raw_bytes)
        Log.info(
            f"Preprocessed {len(context.raw_bytes)} bytes for submission "
            f"{context.submission.id}"
        )
        return context


class ExtractTextStep(PipelineStep):
    stage = ProcessingStage.EXTRACTING
    message = "Extracting text from document..."

    def __init__(self, text_extractor: BaseTextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.processed_bytes:
            raise ValueError("PipelineContext.processed_bytes must be set before OCR")
        context.extracted_text = self._text_extractor.extract(context.processed_bytes)
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from submission "
            f"{context.submission.id}"
        )
        Log.debug(f"OCR transcript:\n{context.extracted_text}")
        return context


class ParseFieldsStep(PipelineStep):
    stage = ProcessingStage.PARSING
    message = "Parsing extracted information..."

    def __init__(self, field_parser: FieldParser) -> None:
        self._field_parser = field_parser

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extraction_result = self._field_parser.parse(context.extracted_text)
        return context


class ValidateStep(PipelineStep):
    stage = ProcessingStage.VALIDATING
    message = "Validating document information..."

    def __init__(self, validator: KycValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction_result is None:
            raise ValueError("PipelineContext.extraction_result must be set before validation")
        context.validation = self._validator.validate(context.extraction_result)
        Log.info(
            f"Validated submission {context.submission.id}: "
            f"valid={context.validation.is_valid}, errors={context.validation.errors}"
        )
        return context
