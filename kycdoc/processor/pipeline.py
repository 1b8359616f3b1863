from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from kycdoc.parsing.models import ExtractionResult
from kycdoc.processor.models import DocumentSubmission, ProcessingStage
from kycdoc.validation.models import ValidationOutcome


@dataclass(slots=True)
class PipelineContext:
    submission: DocumentSubmission
    raw_bytes: bytes = b""
    processed_bytes: bytes = b""
    extracted_text: str = ""
    extraction_result: ExtractionResult | None = None
    validation: ValidationOutcome | None = None
    stage_history: list[ProcessingStage] = field(default_factory=list)
    error_message: str = ""


class PipelineStep(ABC):
    """One unit of work, executed while the pipeline is in ``stage``."""

    stage: ClassVar[ProcessingStage]
    message: ClassVar[str]

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
