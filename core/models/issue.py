"""
Issue-related SQLAlchemy models.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import ALL_EPISODES, ALL_SEASONS, IssueStatus

from .base import Base

if TYPE_CHECKING:
    from .media import Media
    from .user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Issue(Base):
    """
    A problem reported against a media item.

    The comments are kept in insertion order; the first one is the issue
    description written by the reporter.
    """
    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    issue_type: Mapped[int] = mapped_column(Integer)
    status: Mapped[int] = mapped_column(Integer, default=int(IssueStatus.OPEN))
    problem_season: Mapped[int] = mapped_column(Integer, default=ALL_SEASONS)
    problem_episode: Mapped[int] = mapped_column(Integer, default=ALL_EPISODES)
    media_id: Mapped[int] = mapped_column(
        ForeignKey("media.id", ondelete="CASCADE"), index=True
    )
    created_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, onupdate=_utcnow, index=True
    )

    # Relationships
    media: Mapped["Media"] = relationship("Media", back_populates="issues")
    created_by: Mapped["User"] = relationship("User", back_populates="created_issues")
    comments: Mapped[List["IssueComment"]] = relationship(
        "IssueComment",
        back_populates="issue",
        cascade="all, delete-orphan",
        order_by="IssueComment.id",
    )

    @property
    def description(self) -> "IssueComment | None":
        return self.comments[0] if self.comments else None

    def __repr__(self) -> str:
        return f"<Issue id={self.id} type={self.issue_type} status={self.status}>"


class IssueComment(Base):
    """A message on an issue, authored by a user."""

    __tablename__ = "issue_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    issue_id: Mapped[int] = mapped_column(
        ForeignKey("issues.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    message: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    issue: Mapped["Issue"] = relationship("Issue", back_populates="comments")
    user: Mapped["User"] = relationship("User", back_populates="comments")
