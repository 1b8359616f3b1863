import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from kycdoc.database.base import BaseSubmissionStore
from kycdoc.database.connection import get_connection
from kycdoc.database.exceptions import PersistenceError
from kycdoc.database.models import SubmissionRecord
from kycdoc.parsing.models import ExtractionResult
from kycdoc.processor.models import DocumentSubmission, ProcessingStage, VerifiedIdentity


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except psycopg.Error as exc:
        raise PersistenceError(f"Failed to {action}: {exc}") from exc


class SubmissionRepository(BaseSubmissionStore):
    """Database operations for the kyc_submissions and verified_identities tables."""

    def create_submission(self, submission: DocumentSubmission) -> None:
        with _storage_errors("create submission"), get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kyc_submissions
                    (id, owner_id, document_type, raw_image_ref, stage, submitted_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (
                    submission.id,
                    submission.owner_id,
                    submission.document_type,
                    submission.raw_image_ref,
                    ProcessingStage.UPLOADED.value,
                    submission.submitted_at,
                ),
            )
            conn.commit()

    def save_extraction_result(
        self,
        submission_id: str,
        result: ExtractionResult,
        final_status: ProcessingStage,
    ) -> None:
        """Persist the extraction payload and terminal stage.

        Raises:
            PersistenceError: if the row is missing or the write fails.
        """
        with _storage_errors("save extraction result"), get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE kyc_submissions
                    SET extraction_result = %s,
                        stage = %s,
                        error_message = NULL,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (Jsonb(result.to_payload()), final_status.value, submission_id),
                )
                if cur.rowcount == 0:
                    raise PersistenceError(f"Submission {submission_id} not found")
            conn.commit()

    def mark_terminal(
        self,
        submission_id: str,
        final_status: ProcessingStage,
        error_message: str | None,
    ) -> None:
        with _storage_errors("mark submission terminal"), get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE kyc_submissions
                    SET stage = %s, error_message = %s, updated_at = NOW()
                    WHERE id = %s
                    """,
                    (final_status.value, error_message, submission_id),
                )
                if cur.rowcount == 0:
                    raise PersistenceError(f"Submission {submission_id} not found")
            conn.commit()

    def get_submission(self, submission_id: str) -> SubmissionRecord | None:
        try:
            key = uuid.UUID(submission_id)
        except ValueError:
            return None
        with _storage_errors("load submission"), get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, owner_id, document_type, raw_image_ref, stage,
                           error_message, extraction_result, submitted_at, updated_at
                    FROM kyc_submissions
                    WHERE id = %s
                    """,
                    (key,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    def get_latest_submission(self, owner_id: str) -> SubmissionRecord | None:
        with _storage_errors("load latest submission"), get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, owner_id, document_type, raw_image_ref, stage,
                           error_message, extraction_result, submitted_at, updated_at
                    FROM kyc_submissions
                    WHERE owner_id = %s
                    ORDER BY submitted_at DESC
                    LIMIT 1
                    """,
                    (owner_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    def save_verified_identity(
        self,
        owner_id: str,
        submission_id: str | None,
        identity: VerifiedIdentity,
    ) -> None:
        with _storage_errors("save verified identity"), get_connection() as conn:
            conn.execute(
                """
                INSERT INTO verified_identities
                    (owner_id, submission_id, id_number, date_of_birth, confirmed_at)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (owner_id) DO UPDATE
                SET submission_id = EXCLUDED.submission_id,
                    id_number = EXCLUDED.id_number,
                    date_of_birth = EXCLUDED.date_of_birth,
                    confirmed_at = EXCLUDED.confirmed_at
                """,
                (
                    owner_id,
                    submission_id,
                    identity.id_number,
                    identity.date_of_birth,
                    identity.confirmed_at,
                ),
            )
            conn.commit()

    def find_verified_identity(self, owner_id: str) -> VerifiedIdentity | None:
        """Load the confirmed identity for an owner, with the submission it was confirmed against."""
        with _storage_errors("load verified identity"), get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id_number, date_of_birth, confirmed_at, submission_id
                    FROM verified_identities
                    WHERE owner_id = %s
                    """,
                    (owner_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return VerifiedIdentity(
            id_number=row["id_number"],
            date_of_birth=row["date_of_birth"],
            confirmed_at=row["confirmed_at"],
            submission_id=str(row["submission_id"]) if row["submission_id"] else None,
        )

    @staticmethod
    def _to_record(row: dict[str, Any]) -> SubmissionRecord:
        payload = row["extraction_result"]
        return SubmissionRecord(
            id=str(row["id"]),
            owner_id=row["owner_id"],
            document_type=row["document_type"],
            stage=row["stage"],
            submitted_at=row["submitted_at"],
            raw_image_ref=row["raw_image_ref"],
            error_message=row["error_message"],
            result=ExtractionResult.from_payload(payload) if payload else None,
            updated_at=row["updated_at"],
        )
