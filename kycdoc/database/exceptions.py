class PersistenceError(Exception):
    """Raised when the submission store cannot read or write."""
