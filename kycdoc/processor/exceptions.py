class ProcessorError(Exception):
    """Base exception for processor-related errors."""


class ConfirmationError(ProcessorError):
    """Raised when owner-confirmed identity fields are unusable."""


class SubmissionNotFoundError(ProcessorError):
    """Raised when a named submission does not exist for the requesting owner."""
