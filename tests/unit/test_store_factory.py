import pytest

from kycdoc.config.settings import Settings
from kycdoc.database.factory import SubmissionStoreFactory
from kycdoc.database.memory_store import InMemorySubmissionStore
from kycdoc.database.repositories.submission_repository import SubmissionRepository


class TestSubmissionStoreFactory:
    def test_creates_postgres_repository(self) -> None:
        store = SubmissionStoreFactory.create(Settings(persistence_backend="postgres"))
        assert isinstance(store, SubmissionRepository)

    def test_creates_memory_store(self) -> None:
        store = SubmissionStoreFactory.create(Settings(persistence_backend="Memory"))
        assert isinstance(store, InMemorySubmissionStore)

    def test_raises_for_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown persistence backend"):
            SubmissionStoreFactory.create(Settings(persistence_backend="redis"))
