"""
Database management layer.

Provides a singleton DatabaseManager owning the engine and session factory
for the issue store:
- StaticPool with foreign keys enabled for SQLite
- QueuePool for server databases
- Session context manager with auto-commit/rollback

Usage:
    from core.db import db, get_db, Base

    db.initialize()
    with db.session() as session:
        issue = session.get(Issue, 1)
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # Comment cascades rely on ON DELETE CASCADE
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False):
    """
    Create an engine configured for the given database URL.

    SQLite URLs get a StaticPool (one shared connection, usable across
    threads) and foreign key enforcement. Other URLs get a QueuePool sized
    from settings.
    """
    settings = get_settings()

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=echo,
    )


class DatabaseManager:
    """
    Singleton database manager.

    Call initialize() once at app startup; afterwards session() hands out
    sessions that commit on success and roll back on error.
    """

    _instance: Optional["DatabaseManager"] = None
    _initialized: bool = False

    def __new__(cls) -> "DatabaseManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def initialize(self, database_url: str | None = None) -> None:
        """
        Initialize database connection.

        Args:
            database_url: Optional override. Uses settings.database_url if not provided.
        """
        if self._initialized:
            return

        settings = get_settings()
        self.engine = build_engine(database_url or settings.database_url, echo=settings.debug)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )
        self._initialized = True

    def create_all_tables(self) -> None:
        """Create all tables defined by models."""
        self._ensure_initialized()
        # Import registers every model on Base.metadata
        from core import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all_tables(self) -> None:
        """Drop all tables. USE WITH CAUTION."""
        self._ensure_initialized()
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions with auto-commit/rollback.

        Usage:
            with db.session() as session:
                media = session.get(Media, 42)
        """
        self._ensure_initialized()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def health_check(self) -> dict:
        """
        Perform database health check.

        Returns:
            dict with 'healthy' (bool) and 'error' (str or None)
        """
        if not self._initialized:
            return {"healthy": False, "error": "Database not initialized"}

        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"healthy": True, "error": None}
        except Exception as e:
            return {"healthy": False, "error": str(e)}

    def reset(self) -> None:
        """Dispose the engine and clear singleton state."""
        if getattr(self, "engine", None) is not None:
            self.engine.dispose()
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")


# Global singleton
db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/issue/{issue_id}")
        def get_issue(issue_id: int, db: Session = Depends(get_db)):
            ...
    """
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "build_engine", "db", "get_db"]
