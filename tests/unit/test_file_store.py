from pathlib import Path

import pytest

from kycdoc.processor.file_store import FileStore, document_file_path, validate_path_segment


class TestDocumentFilePath:
    def test_builds_owner_scoped_path(self) -> None:
        path = document_file_path(Path("/app/files"), "owner-1", "abc-123", "jpg")
        assert path == Path("/app/files/owner-1/abc-123.jpg")

    @pytest.mark.parametrize("owner_id", ["../escaped", "..", "a/b", "", "/etc", "owner 1"])
    def test_rejects_unsafe_owner_id(self, owner_id: str) -> None:
        with pytest.raises(ValueError, match="Invalid owner id"):
            document_file_path(Path("/app/files"), owner_id, "abc", "jpg")

    def test_rejects_unsafe_submission_id(self) -> None:
        with pytest.raises(ValueError, match="Invalid submission id"):
            document_file_path(Path("/app/files"), "owner-1", "../../abc", "jpg")


class TestValidatePathSegment:
    def test_accepts_uuid_like_ids(self) -> None:
        value = "3f2b8c1e-0d4a-4b7e-9a51-1c2d3e4f5a6b"
        assert validate_path_segment(value) == value

    def test_rejects_overlong_ids(self) -> None:
        with pytest.raises(ValueError):
            validate_path_segment("a" * 129)


class TestFileStore:
    def test_default_root(self) -> None:
        assert FileStore()._files_root == Path("/app/files")

    def test_writes_jpeg(self, tmp_path: Path) -> None:
        path = FileStore(tmp_path).save("owner-1", "abc", b"\xff\xd8data", "image/jpeg")
        assert path == tmp_path / "owner-1" / "abc.jpg"
        assert path.read_bytes() == b"\xff\xd8data"

    def test_writes_png(self, tmp_path: Path) -> None:
        path = FileStore(tmp_path).save("owner-1", "abc", b"png", "image/png")
        assert path.suffix == ".png"

    def test_rejects_unknown_content_type(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported content type"):
            FileStore(tmp_path).save("owner-1", "abc", b"gif", "image/gif")

    def test_traversal_writes_nothing_outside_root(self, tmp_path: Path) -> None:
        root = tmp_path / "files"
        with pytest.raises(ValueError):
            FileStore(root).save("../escaped", "abc", b"\xff\xd8data", "image/jpeg")
        with pytest.raises(ValueError):
            FileStore(root).save(str(tmp_path / "outside"), "abc", b"\xff\xd8data", "image/jpeg")
        assert not (tmp_path / "escaped").exists()
        assert not (tmp_path / "outside").exists()
        assert not root.exists()
