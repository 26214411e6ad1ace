"""Database engine for the component metadata store.

comprel never writes component data; ``create_all`` exists so tests and
fresh checkouts can materialize the schema the crawler fills in.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

# Register tables on SQLModel.metadata
from comprel.store import models  # noqa: F401

if TYPE_CHECKING:
    from sqlalchemy import Engine


class Database:
    """
    Database connection manager for the component store.

    Usage::

        db = Database(Path("components.db"))

        with db.session() as session:
            page = session.get(Page, 1)
    """

    def __init__(self, db_path: Path, *, busy_timeout_ms: int = 30000) -> None:
        """Initialize database with path to SQLite file."""
        self.db_path = db_path
        self.busy_timeout_ms = busy_timeout_ms
        self.engine = self._create_engine()

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine with proper configuration."""
        engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
        )
        busy_timeout_ms = self.busy_timeout_ms

        def _on_connect(dbapi_conn: Any, connection_record: Any) -> None:
            _configure_pragmas(dbapi_conn, connection_record, busy_timeout_ms)

        event.listen(engine, "connect", _on_connect)
        return engine

    def create_all(self) -> None:
        """Create all tables from SQLModel metadata."""
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """ORM session for reads (and fixture seeding in tests)."""
        with Session(self.engine) as session:
            yield session

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def _configure_pragmas(dbapi_conn: Any, _connection_record: Any, busy_timeout_ms: int) -> None:
    """Configure SQLite for reads alongside a concurrent seeding process."""
    cursor = dbapi_conn.cursor()
    cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
