import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg_pool import PoolTimeout

from docucare.config.settings import Settings
from docucare.database.connection import apply_schema, close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docucare_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except (psycopg.Error, PoolTimeout) as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def owner_email() -> str:
    return f"it-{uuid.uuid4().hex[:12]}@example.com"


@pytest.fixture
def integration_cleanup(
    integration_pool: None, owner_email: str
) -> Generator[None, None, None]:
    yield
    with get_connection() as conn:
        conn.execute("DELETE FROM medical_records WHERE owner_email = %s", (owner_email,))
        conn.commit()
