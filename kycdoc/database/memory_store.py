import threading
from dataclasses import replace
from datetime import datetime, timezone

from kycdoc.database.base import BaseSubmissionStore
from kycdoc.database.exceptions import PersistenceError
from kycdoc.database.models import SubmissionRecord
from kycdoc.parsing.models import ExtractionResult
from kycdoc.processor.models import DocumentSubmission, ProcessingStage, VerifiedIdentity


class InMemorySubmissionStore(BaseSubmissionStore):
    """Process-local store for development and tests. Data is lost on restart."""

    def __init__(self) -> None:
        self._submissions: dict[str, SubmissionRecord] = {}
        self._identities: dict[str, tuple[str | None, VerifiedIdentity]] = {}
        self._lock = threading.Lock()

    def create_submission(self, submission: DocumentSubmission) -> None:
        with self._lock:
            self._submissions[submission.id] = SubmissionRecord(
                id=submission.id,
                owner_id=submission.owner_id,
                document_type=submission.document_type,
                stage=ProcessingStage.UPLOADED.value,
                submitted_at=submission.submitted_at,
                raw_image_ref=submission.raw_image_ref,
            )

    def save_extraction_result(
        self,
        submission_id: str,
        result: ExtractionResult,
        final_status: ProcessingStage,
    ) -> None:
        self._update(submission_id, stage=final_status.value, result=result, error_message=None)

    def mark_terminal(
        self,
        submission_id: str,
        final_status: ProcessingStage,
        error_message: str | None,
    ) -> None:
        self._update(submission_id, stage=final_status.value, error_message=error_message)

    def get_submission(self, submission_id: str) -> SubmissionRecord | None:
        with self._lock:
            return self._submissions.get(submission_id)

    def get_latest_submission(self, owner_id: str) -> SubmissionRecord | None:
        with self._lock:
            owned = [s for s in self._submissions.values() if s.owner_id == owner_id]
        if not owned:
            return None
        return max(owned, key=lambda s: s.submitted_at)

    def save_verified_identity(
        self,
        owner_id: str,
        submission_id: str | None,
        identity: VerifiedIdentity,
    ) -> None:
        with self._lock:
            self._identities[owner_id] = (submission_id, identity)

    def find_verified_identity(self, owner_id: str) -> VerifiedIdentity | None:
        with self._lock:
            entry = self._identities.get(owner_id)
        if entry is None:
            return None
        submission_id, identity = entry
        return replace(identity, submission_id=submission_id)

    def _update(self, submission_id: str, **changes: object) -> None:
        with self._lock:
            record = self._submissions.get(submission_id)
            if record is None:
                raise PersistenceError(f"Submission {submission_id} not found")
            self._submissions[submission_id] = replace(
                record, updated_at=datetime.now(timezone.utc), **changes
            )
