import sqlite3

import pytest

from intent.errors import ConnectionPoolExhausted, DatabaseError
from intent.infrastructure.db.pool import ConnectionPool


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "test.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)")
    conn.close()
    return path


def test_connection_recycling(db_path):
    pool = ConnectionPool(db_path, pool_size=1)

    with pool.connection() as conn:
        conn_id = id(conn)

    with pool.connection() as conn:
        assert id(conn) == conn_id


def test_transaction_rollback(db_path):
    pool = ConnectionPool(db_path)

    with pytest.raises(RuntimeError):
        with pool.connection() as conn:
            conn.execute("INSERT INTO test (name) VALUES (?)", ("bar",))
            raise RuntimeError("oops")

    conn = sqlite3.connect(db_path)
    assert conn.execute("SELECT name FROM test WHERE name='bar'").fetchone() is None
    conn.close()


def test_foreign_keys_enabled(db_path):
    pool = ConnectionPool(db_path)
    with pool.connection() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_pool_exhaustion(db_path):
    pool = ConnectionPool(db_path, pool_size=1, timeout=0.05)
    with pool.connection():
        with pytest.raises(ConnectionPoolExhausted):
            with pool.connection():
                pass


def test_failed_open_releases_its_slot(tmp_path):
    db_dir = tmp_path / "later"
    pool = ConnectionPool(db_dir / "test.db", pool_size=1, timeout=0.05)

    with pytest.raises(DatabaseError):
        with pool.connection():
            pass

    db_dir.mkdir()
    with pool.connection() as conn:
        assert conn.execute("SELECT 1").fetchone()[0] == 1
