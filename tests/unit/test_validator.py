from dataclasses import replace
from datetime import date

import pytest

from kycdoc.parsing.models import ExtractionResult
from kycdoc.validation.validator import (
    COUNTRY_ERROR,
    DOB_ERROR,
    ID_ERROR,
    NAME_ERROR,
    KycValidator,
)


@pytest.fixture()
def complete() -> ExtractionResult:
    return ExtractionResult(
        raw_text="...",
        name="Rahul Sharma",
        date_of_birth=date(1994, 3, 15),
        id_number="123456789012",
        country_code="IN",
        document_type="aadhaar",
    )


class TestKycValidator:
    def test_complete_result_is_valid(self, complete: ExtractionResult) -> None:
        outcome = KycValidator().validate(complete)
        assert outcome.is_valid is True
        assert outcome.errors == []
        assert outcome.warnings == []
        assert outcome.requires_manual_entry is False

    def test_missing_country_needs_manual_entry(self, complete: ExtractionResult) -> None:
        outcome = KycValidator().validate(replace(complete, country_code=None))
        assert outcome.is_valid is False
        assert outcome.errors == [COUNTRY_ERROR]
        assert outcome.requires_manual_entry is True
        assert "Document type suggests country IN; please confirm" in outcome.warnings

    def test_errors_follow_rule_order(self) -> None:
        outcome = KycValidator().validate(ExtractionResult(raw_text="", country_code="IN"))
        assert outcome.errors == [NAME_ERROR, DOB_ERROR, ID_ERROR]
        assert outcome.requires_manual_entry is True

    def test_nothing_extracted_is_not_manual_entry(self) -> None:
        outcome = KycValidator().validate(ExtractionResult(raw_text=""))
        assert outcome.errors == [NAME_ERROR, DOB_ERROR, ID_ERROR, COUNTRY_ERROR]
        assert outcome.requires_manual_entry is False

    def test_short_name_is_invalid(self, complete: ExtractionResult) -> None:
        outcome = KycValidator().validate(replace(complete, name="A"))
        assert outcome.errors == [NAME_ERROR]

    def test_short_id_is_invalid(self, complete: ExtractionResult) -> None:
        outcome = KycValidator().validate(replace(complete, id_number="12"))
        assert outcome.errors == [ID_ERROR]

    def test_aadhaar_format_warning(self, complete: ExtractionResult) -> None:
        outcome = KycValidator().validate(replace(complete, id_number="K1234567"))
        assert outcome.is_valid is True
        assert outcome.warnings == ["ID number does not match the 12-digit Aadhaar format"]

    def test_pan_format_warning(self, complete: ExtractionResult) -> None:
        outcome = KycValidator().validate(
            replace(complete, document_type="pan", id_number="123456789012")
        )
        assert outcome.warnings == ["ID number does not match the PAN format"]
