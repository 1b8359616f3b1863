"""Owner confirmation of OCR output.

The owner re-enters (or corrects) the ID number and birth date, and may
supply the name and country they saw in the upload response. The
confirmed fields replace the extracted ones, the result is re-validated,
and a passing result moves the submission to ``verified``.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from kycdoc.database.base import BaseSubmissionStore
from kycdoc.database.models import SubmissionRecord
from kycdoc.logging.logger import Log
from kycdoc.parsing.dates import DateParser
from kycdoc.parsing.models import ExtractionResult
from kycdoc.processor.exceptions import ConfirmationError, SubmissionNotFoundError
from kycdoc.processor.models import ConfirmationOutcome, ProcessingStage, VerifiedIdentity
from kycdoc.validation.validator import KycValidator

_ID_SEPARATORS_RE = re.compile(r"[\s\-.]+")
_COUNTRY_CODE_RE = re.compile(r"[A-Z]{2}")
_MIN_ID_LENGTH = 3


def normalize_id_number(raw: str) -> str:
    """Strip separators and upper-case: ``"1234 5678-9012"`` -> ``"123456789012"``."""
    return _ID_SEPARATORS_RE.sub("", raw).upper()


@dataclass(frozen=True)
class SubmissionStatus:
    """Latest submission with confirmed fields applied on top of the extraction."""

    record: SubmissionRecord
    result: ExtractionResult | None
    identity: VerifiedIdentity | None = None


class IdentityConfirmer:
    """Applies owner corrections to a submission's extraction and re-validates it."""

    def __init__(
        self,
        store: BaseSubmissionStore,
        date_parser: DateParser,
        validator: KycValidator,
    ) -> None:
        self._store = store
        self._date_parser = date_parser
        self._validator = validator

    def confirm(
        self,
        owner_id: str,
        id_number: str,
        date_of_birth: str,
        submission_id: str | None = None,
        *,
        name: str | None = None,
        country_code: str | None = None,
    ) -> ConfirmationOutcome:
        """Normalize, re-validate and store the owner's confirmed identity.

        Without ``submission_id`` the owner's latest submission is used.

        Raises:
            ConfirmationError: if a confirmed field is unusable.
            SubmissionNotFoundError: if ``submission_id`` is not one of the owner's.
        """
        normalized_id = normalize_id_number(id_number)
        if len(normalized_id) < _MIN_ID_LENGTH:
            raise ConfirmationError("ID number must contain at least 3 characters")
        birth_date = self._date_parser.parse(date_of_birth)
        if birth_date is None:
            raise ConfirmationError("Date of birth is invalid or outside the accepted age range")

        overrides: dict[str, object] = {"id_number": normalized_id, "date_of_birth": birth_date}
        if name is not None and name.strip():
            overrides["name"] = " ".join(name.split())
        if country_code is not None and country_code.strip():
            code = country_code.strip().upper()
            if not _COUNTRY_CODE_RE.fullmatch(code):
                raise ConfirmationError("Country code must be two letters, e.g. 'IN'")
            overrides["country_code"] = code

        record = self._target_submission(owner_id, submission_id)
        target_id = record.id if record is not None else None
        base = record.result if record is not None and record.result is not None else None
        merged = replace(base if base is not None else ExtractionResult(raw_text=""), **overrides)
        validation = self._validator.validate(merged)

        identity = VerifiedIdentity(
            id_number=normalized_id,
            date_of_birth=birth_date,
            confirmed_at=datetime.now(timezone.utc),
            submission_id=target_id,
        )
        try:
            self._store.save_verified_identity(owner_id, target_id, identity)
        except Exception as exc:
            Log.warning(f"Could not store verified identity for owner {owner_id}: {exc}")

        stage = ProcessingStage(record.stage) if record is not None else None
        if validation.is_valid and target_id is not None:
            try:
                self._store.save_extraction_result(target_id, merged, ProcessingStage.VERIFIED)
                stage = ProcessingStage.VERIFIED
            except Exception as exc:
                Log.warning(f"Could not mark submission {target_id} verified: {exc}")

        Log.info(
            f"Owner {owner_id} confirmed ID {Log.mask(identity.id_number)} "
            f"(valid={validation.is_valid}, submission={target_id})"
        )
        return ConfirmationOutcome(
            identity=identity,
            result=merged,
            validation=validation,
            submission_id=target_id,
            submission_stage=stage,
        )

    def status(self, owner_id: str) -> SubmissionStatus | None:
        """Latest submission for an owner; confirmed ID and birth date win over OCR."""
        record = self._store.get_latest_submission(owner_id)
        if record is None:
            return None
        try:
            identity = self._store.find_verified_identity(owner_id)
        except Exception as exc:
            Log.warning(f"Could not load verified identity for owner {owner_id}: {exc}")
            identity = None
        if identity is None or identity.submission_id != record.id:
            return SubmissionStatus(record=record, result=record.result)

        result = replace(
            record.result if record.result is not None else ExtractionResult(raw_text=""),
            id_number=identity.id_number,
            date_of_birth=identity.date_of_birth,
        )
        return SubmissionStatus(record=record, result=result, identity=identity)

    def _target_submission(
        self, owner_id: str, submission_id: str | None
    ) -> SubmissionRecord | None:
        if submission_id is None:
            try:
                return self._store.get_latest_submission(owner_id)
            except Exception as exc:
                Log.warning(f"Could not load latest submission for owner {owner_id}: {exc}")
                return None

        try:
            record = self._store.get_submission(submission_id)
        except Exception as exc:
            Log.warning(f"Could not load submission {submission_id}: {exc}")
            return None
        if record is None or record.owner_id != owner_id:
            raise SubmissionNotFoundError(f"Submission {submission_id} not found")
        return record
