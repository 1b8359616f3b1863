"""Best-effort field extraction from OCR transcripts of identity documents.

The parser never raises on content: a field that cannot be found is None.
Validation and owner confirmation are the correctness gates downstream.
"""

import re
from datetime import date

from kycdoc.logging.logger import Log
from kycdoc.parsing.dates import DateParser
from kycdoc.parsing.models import ExtractionResult
from kycdoc.parsing.patterns import (
    AADHAAR_NUMBER_RE,
    AADHAAR_RECOVERY_PATTERNS,
    COUNTRY_KEYWORDS,
    DEFAULT_DOCUMENT_TYPE,
    DOB_PATTERNS,
    DOCUMENT_TYPE_KEYWORDS,
    GENDER_PATTERNS,
    GENDER_VALUES,
    ID_EXCLUDED_WORDS,
    ID_PATTERNS,
    NAME_BOILERPLATE,
    NAME_PATTERNS,
    OCR_DIGIT_CONFUSIONS,
    PAN_MARKER_RE,
    PAN_NUMBER_RE,
    FieldPattern,
)

_MAX_NAME_LENGTH = 100
_ID_SEPARATORS_RE = re.compile(r"[\s\-.]+")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t\r\f\v]+")


def normalize_text(text: str) -> str:
    """Collapse horizontal whitespace per line and read ``|`` as ``I``."""
    lines = (_HORIZONTAL_SPACE_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line).replace("|", "I")


class FieldParser:
    """Extracts name, birth date, ID number and country from raw OCR text."""

    def __init__(self, date_parser: DateParser | None = None) -> None:
        self._date_parser = date_parser if date_parser is not None else DateParser()

    def parse(self, raw_text: str) -> ExtractionResult:
        text = normalize_text(raw_text)
        document_type = self.detect_document_type(text)
        id_number = self.extract_id_number(text)
        if id_number is None and document_type == "aadhaar":
            id_number = self.recover_aadhaar_number(text)

        result = ExtractionResult(
            raw_text=raw_text,
            name=self.extract_name(text),
            date_of_birth=self.extract_date_of_birth(text),
            id_number=id_number,
            country_code=self.detect_country(text),
            document_type=document_type,
            gender=self.extract_gender(text),
        )
        Log.info(
            f"Parsed {document_type} text: name={'yes' if result.name else 'no'}, "
            f"dob={'yes' if result.date_of_birth else 'no'}, "
            f"id={Log.mask(result.id_number)}, country={result.country_code}"
        )
        return result

    def extract_name(self, text: str) -> str | None:
        for pattern in NAME_PATTERNS:
            for match in pattern.regex.finditer(text):
                candidate = match.group(1).strip(" .")
                if self._is_name(candidate):
                    return candidate[:_MAX_NAME_LENGTH]
        return None

    def extract_date_of_birth(self, text: str) -> date | None:
        for pattern in DOB_PATTERNS:
            for match in pattern.regex.finditer(text):
                birth_date = self._read_date(pattern, match)
                if birth_date is not None:
                    return birth_date
        return None

    def extract_id_number(self, text: str) -> str | None:
        for pattern in ID_PATTERNS:
            for match in pattern.regex.finditer(text):
                candidate = _ID_SEPARATORS_RE.sub("", match.group(1))
                if self._is_excluded_id(candidate):
                    Log.debug(f"Skipping boilerplate ID candidate {candidate!r}")
                    continue
                if self._id_matches_kind(pattern.kind, candidate):
                    return candidate.upper()
        return None

    def recover_aadhaar_number(self, text: str) -> str | None:
        """Second pass for Aadhaar cards: undo common letter/digit OCR swaps."""
        for regex in AADHAAR_RECOVERY_PATTERNS:
            for match in regex.finditer(text):
                cleaned = re.sub(r"[^0-9OoIlSZ]", "", match.group(1))
                candidate = cleaned.translate(OCR_DIGIT_CONFUSIONS)
                if AADHAAR_NUMBER_RE.fullmatch(candidate):
                    Log.info(f"Recovered Aadhaar number {Log.mask(candidate)}")
                    return candidate
        return None

    @staticmethod
    def detect_country(text: str) -> str | None:
        lowered = text.lower()
        for country_code, keywords in COUNTRY_KEYWORDS:
            for keyword in keywords:
                if re.search(rf"\b{re.escape(keyword)}\b", lowered):
                    return country_code
        return None

    @staticmethod
    def detect_document_type(text: str) -> str:
        lowered = text.lower()
        for document_type, keywords in DOCUMENT_TYPE_KEYWORDS:
            if document_type == "pan" and PAN_MARKER_RE.search(text):
                return document_type
            if any(keyword in lowered for keyword in keywords):
                return document_type
        return DEFAULT_DOCUMENT_TYPE

    @staticmethod
    def extract_gender(text: str) -> str | None:
        for regex in GENDER_PATTERNS:
            match = regex.search(text)
            if match:
                return GENDER_VALUES.get(match.group(1).lower())
        return None

    def _read_date(self, pattern: FieldPattern, match: re.Match[str]) -> date | None:
        if pattern.kind == "year":
            return self._date_parser.from_year(match.group(1))
        if pattern.kind == "year_month_day":
            return self._date_parser.from_year_month_day(*match.groups())
        return self._date_parser.from_components(*match.groups())

    @staticmethod
    def _is_name(candidate: str) -> bool:
        if len(candidate) < 3 or candidate.replace(" ", "").isdigit():
            return False
        tokens = {token.strip(".'").lower() for token in candidate.split()}
        return not tokens & NAME_BOILERPLATE

    @staticmethod
    def _is_excluded_id(candidate: str) -> bool:
        lowered = candidate.lower()
        return any(word in lowered for word in ID_EXCLUDED_WORDS)

    @staticmethod
    def _id_matches_kind(kind: str, candidate: str) -> bool:
        if kind == "aadhaar":
            return AADHAAR_NUMBER_RE.fullmatch(candidate) is not None
        if kind == "pan":
            return PAN_NUMBER_RE.fullmatch(candidate.upper()) is not None
        return any(char.isdigit() for char in candidate)
