"""Rule checks over an ExtractionResult.

Every rule runs independently. The validator only reports; whether a
failing document is rejected or routed to manual entry is decided by the
caller.
"""

from kycdoc.parsing.models import ExtractionResult
from kycdoc.parsing.patterns import AADHAAR_NUMBER_RE, PAN_NUMBER_RE
from kycdoc.validation.models import ValidationOutcome

NAME_ERROR = "Name not found or invalid"
DOB_ERROR = "Date of birth not found or invalid"
ID_ERROR = "ID number not found or invalid"
COUNTRY_ERROR = "Country not detected"

_MIN_NAME_LENGTH = 2
_MIN_ID_LENGTH = 3
_INDIAN_DOCUMENT_TYPES = frozenset({"aadhaar", "pan"})


class KycValidator:
    """Produces a ValidationOutcome from extracted identity fields."""

    def validate(self, result: ExtractionResult) -> ValidationOutcome:
        errors: list[str] = []
        if not result.name or len(result.name) < _MIN_NAME_LENGTH:
            errors.append(NAME_ERROR)
        if result.date_of_birth is None:
            errors.append(DOB_ERROR)
        if not result.id_number or len(result.id_number) < _MIN_ID_LENGTH:
            errors.append(ID_ERROR)
        if not result.country_code:
            errors.append(COUNTRY_ERROR)

        missing = len(errors)
        total = len(result.required_fields)
        return ValidationOutcome(
            is_valid=not errors,
            errors=errors,
            warnings=self._warnings(result),
            requires_manual_entry=0 < missing < total,
        )

    @staticmethod
    def _warnings(result: ExtractionResult) -> list[str]:
        warnings: list[str] = []
        id_number = result.id_number or ""
        if result.document_type == "aadhaar" and id_number:
            if not AADHAAR_NUMBER_RE.fullmatch(id_number):
                warnings.append("ID number does not match the 12-digit Aadhaar format")
        if result.document_type == "pan" and id_number:
            if not PAN_NUMBER_RE.fullmatch(id_number):
                warnings.append("ID number does not match the PAN format")
        if not result.country_code and result.document_type in _INDIAN_DOCUMENT_TYPES:
            warnings.append("Document type suggests country IN; please confirm")
        return warnings
