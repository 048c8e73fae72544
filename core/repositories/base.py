"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class MediaRepository(BaseRepository[Media]):
            model = Media

        repo = MediaRepository(session)
        media = repo.get_by_id(42)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def save(self, instance: T) -> T:
        """Add (or re-add) an instance and flush pending changes."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, instance: T) -> None:
        self.session.delete(instance)
        self.session.flush()

    def count(self) -> int:
        """Get the total number of records."""
        return self.session.scalar(select(func.count()).select_from(self.model)) or 0
