from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ExtractionResult:
    """Fields found in the OCR transcript. Any field may be missing."""

    raw_text: str
    name: str | None = None
    date_of_birth: date | None = None
    id_number: str | None = None
    country_code: str | None = None
    document_type: str | None = None
    gender: str | None = None

    def to_payload(self) -> dict[str, str | None]:
        """JSON-ready dict; the date is rendered as ISO ``YYYY-MM-DD``."""
        return {
            "name": self.name,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "id_number": self.id_number,
            "country_code": self.country_code,
            "document_type": self.document_type,
            "gender": self.gender,
            "raw_text": self.raw_text,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, str | None]) -> "ExtractionResult":
        dob = payload.get("date_of_birth")
        return cls(
            raw_text=payload.get("raw_text") or "",
            name=payload.get("name"),
            date_of_birth=date.fromisoformat(dob) if dob else None,
            id_number=payload.get("id_number"),
            country_code=payload.get("country_code"),
            document_type=payload.get("document_type"),
            gender=payload.get("gender"),
        )

    @property
    def required_fields(self) -> dict[str, object]:
        return {
            "name": self.name,
            "date_of_birth": self.date_of_birth,
            "id_number": self.id_number,
            "country_code": self.country_code,
        }
