import asyncio
from collections.abc import Callable
from dataclasses import asdict
from datetime import date
from typing import Any

from kycdoc.config.settings import Settings
from kycdoc.database.base import BaseSubmissionStore
from kycdoc.imaging.exceptions import ImageProcessingError
from kycdoc.imaging.preprocessor import ImagePreprocessor
from kycdoc.logging.logger import Log
from kycdoc.notifications.notifier import StatusNotifier
from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.ocr.exceptions import ExtractionError, NoTextDetectedError
from kycdoc.ocr.factory import TextExtractorFactory
from kycdoc.parsing.dates import DateParser
from kycdoc.parsing.field_parser import FieldParser
from kycdoc.processor.models import DocumentSubmission, ProcessingOutcome, ProcessingStage
from kycdoc.processor.pipeline import PipelineContext, PipelineStep
from kycdoc.processor.steps import (
    ExtractTextStep,
    ParseFieldsStep,
    PreprocessImageStep,
    ValidateStep,
)
from kycdoc.validation.validator import KycValidator

UPLOADED_MESSAGE = "Document uploaded. Starting OCR processing..."
IMAGE_REJECTED_MESSAGE = (
    "Image processing failed. Please upload a valid JPEG or PNG image of the document."
)
NO_TEXT_MESSAGE = (
    "Could not extract text from the document. Please ensure the image is clear and readable."
)
EXTRACTION_FAILED_MESSAGE = "Text extraction failed. Please try again with a clearer image."
VERIFIED_MESSAGE = "Document processed successfully. Please verify your information."


class Processor:
    """Orchestrates one document submission through the KYC pipeline.

    Stages: uploaded -> extracting -> parsing -> validating -> terminal.
    Each stage is published to the owner's room before its work starts.
    The terminal stage is persisted best-effort and then published.
    """

    def __init__(
        self,
        *,
        steps: list[PipelineStep],
        notifier: StatusNotifier,
        store: BaseSubmissionStore,
    ) -> None:
        self._steps = steps
        self._notifier = notifier
        self._store = store

    async def process(
        self,
        submission: DocumentSubmission,
        image_bytes: bytes,
    ) -> ProcessingOutcome:
        """Run the pipeline for a submission and return its terminal outcome."""
        Log.info(
            f"Processing submission {submission.id} ({submission.document_type}) "
            f"for owner {submission.owner_id}"
        )
        context = PipelineContext(submission=submission, raw_bytes=image_bytes)
        await self._persist("create_submission", self._store.create_submission, submission)
        await self._enter(context, ProcessingStage.UPLOADED, UPLOADED_MESSAGE)

        try:
            for step in self._steps:
                if step.stage is not context.stage_history[-1]:
                    await self._enter(context, step.stage, step.message)
                context = await asyncio.to_thread(step.run, context)
        except ImageProcessingError as exc:
            return await self._finish(
                context, ProcessingStage.REJECTED, str(exc), IMAGE_REJECTED_MESSAGE
            )
        except NoTextDetectedError as exc:
            return await self._finish(context, ProcessingStage.ERROR, str(exc), NO_TEXT_MESSAGE)
        except ExtractionError as exc:
            return await self._finish(
                context, ProcessingStage.ERROR, str(exc), EXTRACTION_FAILED_MESSAGE
            )
        except Exception as exc:
            await self._finish(context, ProcessingStage.ERROR, str(exc), str(exc))
            raise

        if context.validation is None:
            raise ValueError("Pipeline finished without a validation outcome")
        if context.validation.is_valid:
            return await self._finish(context, ProcessingStage.VERIFIED, None, VERIFIED_MESSAGE)
        errors = ", ".join(context.validation.errors)
        return await self._finish(
            context, ProcessingStage.REJECTED, errors, f"KYC failed: {errors}"
        )

    async def _enter(self, context: PipelineContext, stage: ProcessingStage, message: str) -> None:
        context.stage_history.append(stage)
        await self._notifier.publish(context.submission.owner_id, stage, message)

    async def _finish(
        self,
        context: PipelineContext,
        stage: ProcessingStage,
        error: str | None,
        message: str,
    ) -> ProcessingOutcome:
        submission = context.submission
        context.error_message = error or ""
        if stage is ProcessingStage.VERIFIED and context.extraction_result is not None:
            await self._persist(
                "save_extraction_result",
                self._store.save_extraction_result,
                submission.id,
                context.extraction_result,
                stage,
            )
        else:
            await self._persist(
                "mark_terminal", self._store.mark_terminal, submission.id, stage, error
            )

        outcome = ProcessingOutcome(
            submission_id=submission.id,
            stage=stage,
            result=context.extraction_result,
            validation=context.validation,
            error_message=error,
            stage_history=[*context.stage_history, stage],
        )
        context.stage_history.append(stage)
        await self._notifier.publish(
            submission.owner_id, stage, message, self._terminal_payload(outcome)
        )

        if stage is ProcessingStage.VERIFIED:
            Log.info(f"Submission {submission.id} verified")
        else:
            Log.error(f"Submission {submission.id} ended in {stage.value}: {error}")
        return outcome

    @staticmethod
    def _terminal_payload(outcome: ProcessingOutcome) -> dict[str, Any]:
        return {
            "submission_id": outcome.submission_id,
            "validation": asdict(outcome.validation) if outcome.validation else None,
            "result": outcome.result.to_payload() if outcome.result else None,
            "error": outcome.error_message,
        }

    @staticmethod
    async def _persist(action: str, operation: Callable[..., None], *args: Any) -> None:
        """Run a store write; failures are logged and never change the outcome."""
        try:
            await asyncio.to_thread(operation, *args)
        except Exception as exc:
            Log.warning(f"Persistence failed during {action}: {exc}")


def build_date_parser(
    settings: Settings,
    today: Callable[[], date] = date.today,
) -> DateParser:
    return DateParser(
        today=today,
        min_age=settings.min_age_years,
        max_age=settings.max_age_years,
        year_pivot=settings.two_digit_year_pivot,
    )


def build_processor(
    settings: Settings,
    *,
    notifier: StatusNotifier,
    store: BaseSubmissionStore,
    text_extractor: BaseTextExtractor | None = None,
    today: Callable[[], date] = date.today,
) -> Processor:
    """Build a Processor with the adapters selected by settings."""
    preprocessor = ImagePreprocessor(
        max_dimension=settings.image_max_dimension,
        jpeg_quality=settings.image_jpeg_quality,
    )
    extractor = (
        text_extractor if text_extractor is not None else TextExtractorFactory.create(settings)
    )
    steps: list[PipelineStep] = [
        PreprocessImageStep(preprocessor),
        ExtractTextStep(extractor),
        ParseFieldsStep(FieldParser(build_date_parser(settings, today))),
        ValidateStep(KycValidator()),
    ]
    return Processor(steps=steps, notifier=notifier, store=store)
