import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from labelflow.config.settings import Settings
from labelflow.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "labelai_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
    except Exception as e:
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
def existing_username(db_conn: psycopg.Connection[Any]) -> str:
    with db_conn.cursor() as cur:
        cur.execute("SELECT username FROM users ORDER BY id LIMIT 1")
        row = cur.fetchone()
    if row is None:
        pytest.skip("No users rows in DB for integration test setup")
    return str(row[0])


@pytest.fixture
def history_cleanup(db_conn: psycopg.Connection[Any]) -> Generator[list[int], None, None]:
    created: list[int] = []
    with db_conn.cursor() as cur:
        cur.execute("SELECT COALESCE(MAX(id), 0) FROM history")
        row = cur.fetchone()
    db_conn.commit()
    high_water = int(row[0]) if row else 0
    created.append(high_water)
    yield created
    with db_conn.cursor() as cur:
        cur.execute("DELETE FROM history WHERE id > %s", (high_water,))
    db_conn.commit()
