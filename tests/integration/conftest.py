import os
import uuid
from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import psycopg
import pytest

from kycdoc.config.settings import Settings
from kycdoc.database.connection import close_pool, get_connection, init_pool
from kycdoc.processor.models import DocumentSubmission

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "kycdoc" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "kycdoc_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings, timeout=3.0)
    except Exception as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text())
            conn.commit()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def owner_id(integration_pool: None) -> Generator[str, None, None]:
    """A fresh owner id whose rows are removed after the test."""
    value = f"it-{uuid.uuid4()}"
    yield value
    with get_connection() as conn:
        conn.execute("DELETE FROM verified_identities WHERE owner_id = %s", (value,))
        conn.execute("DELETE FROM kyc_submissions WHERE owner_id = %s", (value,))
        conn.commit()


@pytest.fixture
def make_submission(owner_id: str) -> Any:
    def _make(submitted_at: datetime | None = None) -> DocumentSubmission:
        return DocumentSubmission(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            document_type="aadhaar",
            submitted_at=submitted_at or datetime.now(timezone.utc),
            raw_image_ref=None,
        )

    return _make
