"""Request and response bodies for the KYC HTTP API.

Fields are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kycdoc.processor.confirmation import SubmissionStatus
from kycdoc.processor.models import ConfirmationOutcome, ProcessingOutcome, VerifiedIdentity


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResponse(CamelModel):
    submission_id: str
    stage: str
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    requires_manual_entry: bool = False
    result: dict[str, Any] | None = None

    @classmethod
    def from_outcome(cls, outcome: ProcessingOutcome) -> "UploadResponse":
        return cls(
            submission_id=outcome.submission_id,
            stage=outcome.stage.value,
            is_valid=outcome.is_valid,
            errors=outcome.errors,
            warnings=outcome.warnings,
            requires_manual_entry=outcome.requires_manual_entry,
            result=outcome.result.to_payload() if outcome.result is not None else None,
        )


class VerifyRequest(CamelModel):
    owner_id: str = Field(min_length=1)
    id_number: str
    date_of_birth: str
    submission_id: str | None = None
    name: str | None = None
    country_code: str | None = None


class VerifyResponse(CamelModel):
    success: bool
    message: str
    submission_id: str | None = None
    stage: str | None = None
    id_number: str
    date_of_birth: str
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: ConfirmationOutcome) -> "VerifyResponse":
        validation = outcome.validation
        if validation.is_valid:
            message = "KYC verification completed successfully"
        else:
            message = f"KYC verification failed: {', '.join(validation.errors)}"
        return cls(
            success=validation.is_valid,
            message=message,
            submission_id=outcome.submission_id,
            stage=outcome.submission_stage.value if outcome.submission_stage else None,
            id_number=outcome.identity.id_number,
            date_of_birth=outcome.identity.date_of_birth.isoformat(),
            is_valid=validation.is_valid,
            errors=list(validation.errors),
            warnings=list(validation.warnings),
        )


class IdentityBody(CamelModel):
    id_number: str
    date_of_birth: str
    confirmed_at: str

    @classmethod
    def from_identity(cls, identity: VerifiedIdentity) -> "IdentityBody":
        return cls(
            id_number=identity.id_number,
            date_of_birth=identity.date_of_birth.isoformat(),
            confirmed_at=identity.confirmed_at.isoformat(),
        )


class StatusResponse(CamelModel):
    submission_id: str
    owner_id: str
    document_type: str
    stage: str
    error_message: str | None = None
    result: dict[str, Any] | None = None
    verified_identity: IdentityBody | None = None
    submitted_at: str
    updated_at: str | None = None

    @classmethod
    def from_status(cls, current: SubmissionStatus) -> "StatusResponse":
        record = current.record
        return cls(
            submission_id=record.id,
            owner_id=record.owner_id,
            document_type=record.document_type,
            stage=record.stage,
            error_message=record.error_message,
            result=current.result.to_payload() if current.result is not None else None,
            verified_identity=(
                IdentityBody.from_identity(current.identity) if current.identity else None
            ),
            submitted_at=record.submitted_at.isoformat(),
            updated_at=record.updated_at.isoformat() if record.updated_at else None,
        )
