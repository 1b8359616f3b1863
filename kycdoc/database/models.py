from dataclasses import dataclass
from datetime import datetime

from kycdoc.parsing.models import ExtractionResult


@dataclass
class SubmissionRecord:
    """Represents a row from the kyc_submissions table."""

    id: str
    owner_id: str
    document_type: str
    stage: str
    submitted_at: datetime
    raw_image_ref: str | None = None
    error_message: str | None = None
    result: ExtractionResult | None = None
    updated_at: datetime | None = None
