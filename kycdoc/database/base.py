from abc import ABC, abstractmethod

from kycdoc.database.models import SubmissionRecord
from kycdoc.parsing.models import ExtractionResult
from kycdoc.processor.models import DocumentSubmission, ProcessingStage, VerifiedIdentity


class BaseSubmissionStore(ABC):
    """Contract for submission persistence backends.

    Every method raises PersistenceError on storage failure.
    """

    @abstractmethod
    def create_submission(self, submission: DocumentSubmission) -> None:
        """Record a new submission in the ``uploaded`` stage."""

    @abstractmethod
    def save_extraction_result(
        self,
        submission_id: str,
        result: ExtractionResult,
        final_status: ProcessingStage,
    ) -> None:
        """Store the extraction result together with the terminal stage."""

    @abstractmethod
    def mark_terminal(
        self,
        submission_id: str,
        final_status: ProcessingStage,
        error_message: str | None,
    ) -> None:
        """Store only the terminal stage and error text."""

    @abstractmethod
    def get_submission(self, submission_id: str) -> SubmissionRecord | None:
        """A submission by id, or None if it does not exist."""

    @abstractmethod
    def get_latest_submission(self, owner_id: str) -> SubmissionRecord | None:
        """Most recently submitted document for an owner, or None."""

    @abstractmethod
    def save_verified_identity(
        self,
        owner_id: str,
        submission_id: str | None,
        identity: VerifiedIdentity,
    ) -> None:
        """Store owner-confirmed identity fields."""

    @abstractmethod
    def find_verified_identity(self, owner_id: str) -> VerifiedIdentity | None:
        """Owner-confirmed identity fields, or None if never confirmed."""
