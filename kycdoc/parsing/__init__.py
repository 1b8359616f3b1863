from kycdoc.parsing.dates import DateParser
from kycdoc.parsing.field_parser import FieldParser
from kycdoc.parsing.models import ExtractionResult

__all__ = ["DateParser", "ExtractionResult", "FieldParser"]
