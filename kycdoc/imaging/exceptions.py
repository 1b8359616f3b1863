class ImageProcessingError(Exception):
    """Raised when an uploaded image cannot be decoded or normalized."""
