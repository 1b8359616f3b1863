"""Birth-date interpretation for OCR'd identity documents.

Numeric ``a/b/y`` dates are ambiguous. The first group is tried as the
month (``MM/DD``), then as the day (``DD/MM``); the first candidate that
is a real date, not in the future and inside the age range wins. There is
no locale detection: when both orderings are plausible the month-first
reading is returned.
"""

import re
from collections.abc import Callable
from datetime import date

_DAYS_PER_YEAR = 365.25

_NUMERIC_DATE_RE = re.compile(r"(\d{1,2})[/\-. ](\d{1,2})[/\-. ](\d{4}|\d{2})\b")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")


def resolve_two_digit_year(year: int, pivot: int = 50) -> int:
    """Expand a two-digit year: above the pivot is 19xx, otherwise 20xx."""
    return 1900 + year if year > pivot else 2000 + year


def age_in_years(birth_date: date, today: date) -> float:
    return (today - birth_date).days / _DAYS_PER_YEAR


class DateParser:
    """Parses birth dates and applies the plausibility rule."""

    def __init__(
        self,
        *,
        today: Callable[[], date] = date.today,
        min_age: int = 18,
        max_age: int = 120,
        year_pivot: int = 50,
    ) -> None:
        self._today = today
        self._min_age = min_age
        self._max_age = max_age
        self._year_pivot = year_pivot

    def today(self) -> date:
        return self._today()

    def is_plausible(self, birth_date: date) -> bool:
        """Not in the future and implying an age inside the configured range."""
        today = self._today()
        if birth_date > today:
            return False
        age = age_in_years(birth_date, today)
        return self._min_age <= age <= self._max_age

    def parse(self, text: str) -> date | None:
        """Parse ``YYYY-MM-DD`` or an ``a/b/y`` date string. None if implausible."""
        value = text.strip()
        iso = _ISO_DATE_RE.fullmatch(value)
        if iso:
            return self.from_year_month_day(*iso.groups())
        match = _NUMERIC_DATE_RE.search(value)
        if match is None:
            return None
        return self.from_components(*match.groups())

    def from_components(self, first: str, second: str, year: str) -> date | None:
        """Resolve ``first/second/year`` trying MM/DD, then DD/MM."""
        full_year = int(year)
        if len(year) == 2:
            full_year = resolve_two_digit_year(full_year, self._year_pivot)
        for month, day in ((int(first), int(second)), (int(second), int(first))):
            candidate = self._build(full_year, month, day)
            if candidate is not None and self.is_plausible(candidate):
                return candidate
        return None

    def from_year_month_day(self, year: str, month: str, day: str) -> date | None:
        candidate = self._build(int(year), int(month), int(day))
        if candidate is not None and self.is_plausible(candidate):
            return candidate
        return None

    def from_year(self, year: str) -> date | None:
        """Year-only documents resolve to January 1st of that year."""
        value = int(year)
        if value < 1900 or value > self._today().year:
            return None
        candidate = date(value, 1, 1)
        return candidate if self.is_plausible(candidate) else None

    @staticmethod
    def _build(year: int, month: int, day: int) -> date | None:
        try:
            return date(year, month, day)
        except ValueError:
            return None
