from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationOutcome:
    """Facts about an ExtractionResult; the orchestrator decides disposition."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    requires_manual_entry: bool = False
