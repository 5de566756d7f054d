"""Tests for pooled connection handling."""
import pytest
from unittest.mock import patch, MagicMock

from userstore.config import Settings
from userstore.database import connection


@pytest.fixture(autouse=True)
def reset_pool(monkeypatch):
    monkeypatch.setattr(connection, "_pool", None)


class TestGetPool:
    def test_creates_pool_from_settings(self):
        settings = Settings(postgres_uri="postgresql://test", pool_min=2, pool_max=7)
        with patch("userstore.database.connection.load_settings", return_value=settings), \
             patch("userstore.database.connection.ThreadedConnectionPool") as mock_pool_cls:
            pool = connection.get_pool()
        mock_pool_cls.assert_called_once_with(2, 7, "postgresql://test")
        assert pool is mock_pool_cls.return_value

    def test_reuses_existing_pool(self):
        settings = Settings(postgres_uri="postgresql://test")
        with patch("userstore.database.connection.load_settings", return_value=settings), \
             patch("userstore.database.connection.ThreadedConnectionPool") as mock_pool_cls:
            first = connection.get_pool()
            second = connection.get_pool()
        assert first is second
        mock_pool_cls.assert_called_once()

    def test_raises_without_postgres_uri(self):
        settings = Settings(postgres_uri=None)
        with patch("userstore.database.connection.load_settings", return_value=settings):
            with pytest.raises(ValueError, match="POSTGRES_URI"):
                connection.get_pool()


class TestClosePool:
    def test_closes_and_forgets_pool(self, monkeypatch):
        pool = MagicMock()
        monkeypatch.setattr(connection, "_pool", pool)
        connection.close_pool()
        pool.closeall.assert_called_once()
        assert connection._pool is None

    def test_noop_without_pool(self):
        connection.close_pool()
        assert connection._pool is None


class TestReleaseConnection:
    def test_returns_to_pool(self):
        pool = MagicMock(closed=False)
        conn = MagicMock()
        connection.release_connection(pool, conn)
        pool.putconn.assert_called_once_with(conn)
        conn.close.assert_not_called()

    def test_closed_pool_closes_connection(self):
        pool = MagicMock(closed=True)
        conn = MagicMock()
        connection.release_connection(pool, conn)
        conn.close.assert_called_once()
        pool.putconn.assert_not_called()


def _mock_pool():
    """Open pool whose getconn() hands out a connection yielding a mock cursor."""
    pool = MagicMock(closed=False)
    mock_conn = pool.getconn.return_value
    mock_cursor = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    return pool, mock_conn, mock_cursor


class TestGetCursor:
    def test_yields_realdict_cursor_and_commits(self, monkeypatch):
        pool, mock_conn, mock_cursor = _mock_pool()
        monkeypatch.setattr(connection, "_pool", pool)
        with connection.get_cursor() as cur:
            cur.execute("SELECT 1")
        assert cur is mock_cursor
        assert mock_conn.cursor.call_args.kwargs["cursor_factory"] is connection.RealDictCursor
        mock_conn.commit.assert_called_once()
        mock_conn.rollback.assert_not_called()
        pool.putconn.assert_called_once_with(mock_conn)

    def test_rollback_on_exception(self, monkeypatch):
        pool, mock_conn, _ = _mock_pool()
        monkeypatch.setattr(connection, "_pool", pool)
        with pytest.raises(RuntimeError):
            with connection.get_cursor():
                raise RuntimeError("test error")
        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        pool.putconn.assert_called_once_with(mock_conn)

    def test_returns_connection_to_the_pool_it_came_from(self, monkeypatch):
        old_pool, mock_conn, _ = _mock_pool()
        new_pool = MagicMock(closed=False)
        monkeypatch.setattr(connection, "_pool", old_pool)
        with connection.get_cursor():
            # pool replaced while the connection is borrowed
            old_pool.closed = True
            monkeypatch.setattr(connection, "_pool", new_pool)
        mock_conn.close.assert_called_once()
        old_pool.putconn.assert_not_called()
        new_pool.putconn.assert_not_called()

    def test_release_does_not_mask_error_after_pool_replaced(self, monkeypatch):
        old_pool, mock_conn, _ = _mock_pool()
        monkeypatch.setattr(connection, "_pool", old_pool)
        with pytest.raises(RuntimeError, match="original"):
            with connection.get_cursor():
                old_pool.closed = True
                monkeypatch.setattr(connection, "_pool", MagicMock(closed=False))
                raise RuntimeError("original")
        mock_conn.rollback.assert_called_once()

    def test_open_original_pool_gets_connection_back(self, monkeypatch):
        old_pool, mock_conn, _ = _mock_pool()
        new_pool = MagicMock(closed=False)
        monkeypatch.setattr(connection, "_pool", old_pool)
        with connection.get_cursor():
            monkeypatch.setattr(connection, "_pool", new_pool)
        old_pool.putconn.assert_called_once_with(mock_conn)
        new_pool.putconn.assert_not_called()
