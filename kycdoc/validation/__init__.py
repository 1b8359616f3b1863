from kycdoc.validation.models import ValidationOutcome
from kycdoc.validation.validator import KycValidator

__all__ = ["KycValidator", "ValidationOutcome"]
