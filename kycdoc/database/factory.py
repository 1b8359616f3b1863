from kycdoc.config.settings import Settings
from kycdoc.database.base import BaseSubmissionStore
from kycdoc.database.memory_store import InMemorySubmissionStore
from kycdoc.database.repositories.submission_repository import SubmissionRepository


class SubmissionStoreFactory:
    """Creates the persistence backend selected by settings."""

    BACKENDS: dict[str, type[BaseSubmissionStore]] = {
        "postgres": SubmissionRepository,
        "memory": InMemorySubmissionStore,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSubmissionStore:
        backend = settings.persistence_backend.lower()
        store_cls = cls.BACKENDS.get(backend)
        if store_cls is None:
            raise ValueError(
                f"Unknown persistence backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
            )
        return store_cls()
