"""
Media SQLAlchemy model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .issue import Issue


class Media(Base):
    """
    A movie or TV show known to the request manager.

    Rich metadata (title, artwork) is not stored here; it is looked up from
    TMDB by ``tmdb_id`` and ``media_type`` when needed.
    """

    __tablename__ = "media"
    __table_args__ = (
        UniqueConstraint("tmdb_id", "media_type", name="uq_media_tmdb_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tmdb_id: Mapped[int] = mapped_column(Integer, index=True)
    tvdb_id: Mapped[Optional[int]] = mapped_column(Integer)
    media_type: Mapped[str] = mapped_column(String(16))  # 'movie' | 'tv'
    service_url: Mapped[Optional[str]] = mapped_column(String(512))
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    issues: Mapped[List["Issue"]] = relationship(
        "Issue", back_populates="media", cascade="all, delete-orphan"
    )
