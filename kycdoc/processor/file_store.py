import re
from pathlib import Path

_EXTENSIONS = {"image/jpeg": "jpg", "image/png": "png"}
_SAFE_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]{1,128}")


def validate_path_segment(value: str, label: str = "owner id") -> str:
    """Return ``value`` if it is a single safe path segment.

    Raises:
        ValueError: for separators, dot segments, absolute paths or empty values.
    """
    if not _SAFE_SEGMENT_RE.fullmatch(value):
        raise ValueError(
            f"Invalid {label} {value!r}: use 1-128 letters, digits, '_' or '-'"
        )
    return value


def document_file_path(files_root: Path, owner_id: str, submission_id: str, extension: str) -> Path:
    """Build path to an uploaded image: {files_root}/{owner_id}/{submission_id}.{ext}

    Raises:
        ValueError: if the ids are not safe segments or the path leaves files_root.
    """
    validate_path_segment(owner_id)
    validate_path_segment(submission_id, "submission id")
    path = files_root / owner_id / f"{submission_id}.{extension}"
    if not path.resolve().is_relative_to(files_root.resolve()):
        raise ValueError(f"Resolved path {path} is outside {files_root}")
    return path


class FileStore:
    """Writes uploaded document images under a per-owner directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def save(self, owner_id: str, submission_id: str, data: bytes, content_type: str) -> Path:
        """Write image bytes and return the resolved path.

        Raises:
            ValueError: if the content type has no known extension or an id is unsafe.
            OSError: if the file cannot be written.
        """
        extension = _EXTENSIONS.get(content_type)
        if extension is None:
            raise ValueError(f"Unsupported content type '{content_type}'")
        path = document_file_path(self._files_root, owner_id, submission_id, extension)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
