"""Ordered extraction strategies for identity-document fields.

Each field has a prioritized list of tagged patterns. The parser evaluates
them in order and keeps the first accepted candidate; there is no scoring
across patterns.
"""

import re
from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class FieldPattern:
    """A regex plus the tag telling the parser how to read its groups."""

    kind: str
    regex: re.Pattern[str]


def _p(kind: str, pattern: str, flags: int = 0) -> FieldPattern:
    return FieldPattern(kind=kind, regex=re.compile(pattern, flags))


# Stops a labeled name before the next label on the same line.
_NAME_END = (
    r"(?=[ ]*(?:$|\b(?:DOB|D\.O\.B|Date|Year|Gender|Sex|Father|Address"
    r"|Aadhaar|Aadhar|ID|PAN)\b))"
)
_NAME_BODY = r"([A-Za-z][A-Za-z.' ]{1,99}?)"

NAME_PATTERNS: Final[tuple[FieldPattern, ...]] = (
    _p(
        "labeled",
        r"\b(?:Full\s+Name|Given\s+Name|Name|नाम|పేరు)[ \t]*[:\-]?[ \t]*" + _NAME_BODY + _NAME_END,
        re.IGNORECASE | re.MULTILINE,
    ),
    _p(
        "labeled",
        r"\b(?:Surname|Family\s+Name|Last\s+Name)[ \t]*[:\-]?[ \t]*" + _NAME_BODY + _NAME_END,
        re.IGNORECASE | re.MULTILINE,
    ),
    _p("pan_holder", r"\b[A-Z]{5}[0-9]{4}[A-Z]\b\s+([A-Z][A-Z ]{9,49}?)[ ]*$", re.MULTILINE),
    _p("proper_case", r"\b([A-Z][a-z]{2,} [A-Z][a-z]{2,} [A-Z][a-z]{2,})\b"),
    _p("proper_case", r"\b([A-Z][a-z]{2,} [A-Z][a-z]+)\b"),
)

NAME_BOILERPLATE: Final[frozenset[str]] = frozenset(
    {
        "aadhaar", "aadhar", "account", "address", "authority", "birth", "card",
        "commission", "date", "department", "dob", "election", "father", "female",
        "government", "identification", "income", "india", "male", "mother",
        "number", "of", "passport", "permanent", "republic", "signature", "tax",
        "unique", "year",
    }
)

_DOB_LABEL = (
    r"(?:DOB|D\.O\.B\.?|Date\s+of\s+Birth|जन्म\s+तिथि|పుట్టిన\s+తేదీ|Birth|Born)"
)

DOB_PATTERNS: Final[tuple[FieldPattern, ...]] = (
    _p(
        "first_second_year",
        _DOB_LABEL + r"[:\s/]*(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})\b",
        re.IGNORECASE,
    ),
    _p(
        "first_second_year",
        _DOB_LABEL + r"[:\s/]*(\d{1,2})[/\-. ](\d{1,2})[/\-. ](\d{4}|\d{2})\b",
        re.IGNORECASE,
    ),
    _p("first_second_year", r"\b(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})\b"),
    _p("year_month_day", r"\b(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})\b"),
    _p(
        "year",
        r"(?:Year\s+of\s+Birth|Birth\s+Year|जन्म\s+वर्ष|Born)[:\s]*(\d{4})\b",
        re.IGNORECASE,
    ),
    _p("first_second_year", r"\b(\d{1,2})[/\-. ](\d{1,2})[/\-. ](\d{4}|\d{2})\b"),
)

ID_PATTERNS: Final[tuple[FieldPattern, ...]] = (
    _p("aadhaar", r"\b(\d{4}[ ]+\d{4}[ ]+\d{4})\b"),
    _p(
        "aadhaar",
        r"(?:Aadhaar|Aadhar|आधार|UID)(?:\s+(?:No\.?|Number))?[: ]*(\d{4}[ \-]?\d{4}[ \-]?\d{4})",
        re.IGNORECASE,
    ),
    _p("aadhaar", r"\b(\d{4}[ \-.]\d{4}[ \-.]\d{4})\b"),
    _p("aadhaar", r"\b(\d{12})\b"),
    _p(
        "pan",
        r"(?:PAN|पैन|Permanent\s+Account\s+Number)[:\s]*([A-Z]{5}[0-9]{4}[A-Z])",
        re.IGNORECASE,
    ),
    _p("pan", r"\b([A-Z]{5}[0-9]{4}[A-Z])\b"),
    _p(
        "generic",
        r"(?:Passport(?:\s+No\.?)?|पासपोर्ट)[:\s]*([A-Z0-9]{6,12})\b",
        re.IGNORECASE,
    ),
    _p(
        "generic",
        r"(?:Voter\s+ID|EPIC(?:\s+No\.?)?|मतदाता\s+आईडी)[:\s]*([A-Z0-9]{6,12})\b",
        re.IGNORECASE,
    ),
    _p("generic", r"\b(?:ID|Number|No\.?)[:\s]+([A-Z0-9]{6,15})\b", re.IGNORECASE),
    _p("generic", r"\b([A-Z]{2,5}[0-9]{4,}[A-Z0-9]{0,5})\b"),
    _p("generic", r"\b([0-9]{10,11})\b"),
)

# Candidates containing any of these are OCR'd boilerplate, not IDs.
ID_EXCLUDED_WORDS: Final[tuple[str, ...]] = (
    "entity", "identity", "government", "bharat", "sarkar", "meant", "meri", "pehchan",
)

AADHAAR_RECOVERY_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\b([0-9OIlSZ]{4}[ \-.]{1,2}[0-9OIlSZ]{4}[ \-.]{1,2}[0-9OIlSZ]{4})\b"),
    re.compile(r"([0-9OIl]{12,})"),
)

OCR_DIGIT_CONFUSIONS: Final[dict[int, str]] = str.maketrans(
    {"O": "0", "o": "0", "I": "1", "l": "1", "S": "5", "Z": "2"}
)

AADHAAR_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"[0-9]{12}")
PAN_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")

# Ordered: the first country with a keyword hit wins.
COUNTRY_KEYWORDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("IN", ("india", "indian", "bharat")),
    ("US", ("usa", "united states", "america", "american")),
    ("GB", ("uk", "united kingdom", "britain", "british")),
    ("CA", ("canada", "canadian")),
    ("AU", ("australia", "australian")),
    ("DE", ("germany", "german", "deutschland")),
    ("FR", ("france", "french", "français")),
    ("JP", ("japan", "japanese")),
    ("CN", ("china", "chinese")),
    ("BR", ("brazil", "brazilian")),
)

DOCUMENT_TYPE_KEYWORDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("aadhaar", ("aadhaar", "aadhar", "आधार", "uidai")),
    ("pan", ("permanent account number", "income tax")),
    ("passport", ("passport", "पासपोर्ट")),
    ("voter_id", ("voter", "elector", "मतदाता")),
    ("driving_license", ("driving", "license", "licence", "ड्राइविंग")),
)
PAN_MARKER_RE: Final[re.Pattern[str]] = re.compile(r"\bPAN\b")
DEFAULT_DOCUMENT_TYPE: Final[str] = "national_id"

GENDER_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(
        r"\b(?:Gender|Sex|लिंग)\s*[:/]?\s*(Male|Female|Transgender|M|F|पुरुष|महिला)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(MALE|FEMALE|TRANSGENDER|Male|Female|Transgender)\b"),
)

GENDER_VALUES: Final[dict[str, str]] = {
    "male": "male",
    "m": "male",
    "पुरुष": "male",
    "female": "female",
    "f": "female",
    "महिला": "female",
    "transgender": "transgender",
}
