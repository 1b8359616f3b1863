from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from kycdoc.parsing.models import ExtractionResult
from kycdoc.validation.models import ValidationOutcome


class ProcessingStage(str, Enum):
    """Steps of the document state machine, in transition order."""

    UPLOADED = "uploaded"
    EXTRACTING = "extracting"
    PARSING = "parsing"
    VALIDATING = "validating"
    VERIFIED = "verified"
    REJECTED = "rejected"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STAGES


_TERMINAL_STAGES = frozenset(
    {ProcessingStage.VERIFIED, ProcessingStage.REJECTED, ProcessingStage.ERROR}
)


@dataclass(frozen=True)
class DocumentSubmission:
    """An uploaded identity document. Immutable once created."""

    id: str
    owner_id: str
    document_type: str
    submitted_at: datetime
    raw_image_ref: str | None = None


@dataclass(frozen=True)
class VerifiedIdentity:
    """Owner-confirmed identity fields, normalized."""

    id_number: str
    date_of_birth: date
    confirmed_at: datetime
    submission_id: str | None = None


@dataclass
class ProcessingOutcome:
    """Terminal result of one submission as returned to the caller."""

    submission_id: str
    stage: ProcessingStage
    result: ExtractionResult | None = None
    validation: ValidationOutcome | None = None
    error_message: str | None = None
    stage_history: list[ProcessingStage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.stage is ProcessingStage.VERIFIED

    @property
    def errors(self) -> list[str]:
        if self.validation is not None and self.validation.errors:
            return list(self.validation.errors)
        return [self.error_message] if self.error_message else []

    @property
    def warnings(self) -> list[str]:
        return list(self.validation.warnings) if self.validation is not None else []

    @property
    def requires_manual_entry(self) -> bool:
        return self.validation.requires_manual_entry if self.validation is not None else False


@dataclass(frozen=True)
class ConfirmationOutcome:
    """Result of the owner confirming or correcting OCR output."""

    identity: VerifiedIdentity
    result: ExtractionResult
    validation: ValidationOutcome
    submission_id: str | None = None
    submission_stage: ProcessingStage | None = None
