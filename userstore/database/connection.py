"""Pooled database connections.

Each call borrows a connection for its own duration and hands it back,
so no single handle is shared across the process lifetime.
"""

import logging
import threading
from contextlib import contextmanager

from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from ..config import load_settings

logger = logging.getLogger(__name__)

_pool = None
_pool_lock = threading.Lock()


def get_pool() -> ThreadedConnectionPool:
    """Return the process-wide pool, creating it from POSTGRES_URI on first use."""
    global _pool
    with _pool_lock:
        if _pool is None:
            settings = load_settings()
            if not settings.postgres_uri:
                raise ValueError("POSTGRES_URI must be set")
            _pool = ThreadedConnectionPool(
                settings.pool_min, settings.pool_max, settings.postgres_uri
            )
            logger.debug(
                "Created connection pool (min=%d, max=%d)",
                settings.pool_min, settings.pool_max,
            )
        return _pool


def close_pool():
    """Close every pooled connection. The next call builds a fresh pool."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.closeall()
            _pool = None
            logger.debug("Closed connection pool")


def release_connection(pool, conn):
    """Return a borrowed connection to the pool it came from.

    A pool closed while the connection was out has already closed it.
    """
    if pool.closed:
        conn.close()
        return
    pool.putconn(conn)


@contextmanager
def get_cursor():
    """Context manager for database cursor with auto-commit/rollback."""
    pool = get_pool()
    conn = pool.getconn()
    try:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            yield cur
            conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        release_connection(pool, conn)
