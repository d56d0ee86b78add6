"""Database engine factory.

Centralizes creation of SQLAlchemy Engines so every connection is configured
the same way. For SQLite this means:

- connection PRAGMAs enforcing foreign keys and enabling WAL;
- taking over transaction control from pysqlite so each transaction starts
  with ``BEGIN IMMEDIATE``. The write lock is then held from the first read,
  which serializes read-then-write units of work (e.g. computing the next
  invoice interval) instead of letting two of them read the same snapshot.

PostgreSQL needs no tuning here; repositories lock rows explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Connection, Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
SQLITE_BUSY_TIMEOUT_MS = 5000


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    engine = create_engine(url, echo=echo)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            # stop pysqlite from emitting its own (deferred) BEGIN
            dbapi_conn.isolation_level = None
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
            cur.close()

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn: Connection):  # pylint: disable=W0612
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine
