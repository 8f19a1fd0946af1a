from unittest.mock import patch

import pytest

from labelflow.config.settings import Settings
from labelflow.database import connection
from labelflow.database.connection import build_conninfo, close_pool, get_connection, init_pool


@pytest.fixture(autouse=True)
def _reset_pool():
    yield
    connection._pool = None


class TestBuildConninfo:
    def test_includes_database_and_application_name(self) -> None:
        settings = Settings(
            db_host="db", db_port=5433, db_database="labels", service_name="label-api"
        )
        conninfo = build_conninfo(settings)
        assert "host=db" in conninfo
        assert "port=5433" in conninfo
        assert "dbname=labels" in conninfo
        assert "application_name=label-api" in conninfo


class TestPoolLifecycle:
    def test_init_pool_applies_size_and_checkout_timeout(self) -> None:
        settings = Settings(db_pool_max_size=4, db_pool_timeout_seconds=1.5)
        with patch("labelflow.database.connection.ConnectionPool") as mock_pool:
            init_pool(settings)
        kwargs = mock_pool.call_args.kwargs
        assert kwargs["max_size"] == 4
        assert kwargs["timeout"] == 1.5
        assert kwargs["name"] == "labelflow-audit"

    def test_close_pool_closes_and_forgets(self) -> None:
        with patch("labelflow.database.connection.ConnectionPool") as mock_pool:
            init_pool(Settings())
        close_pool()
        mock_pool.return_value.close.assert_called_once()
        assert connection._pool is None

    def test_get_connection_requires_pool(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            with get_connection():
                pass
