"""
User SQLAlchemy model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.permissions import Permission, PermissionMode, has_permission

from .base import Base

if TYPE_CHECKING:
    from .issue import Issue, IssueComment


class User(Base):
    """
    Application user account.

    Attributes:
        email: Login email
        display_name: Name shown next to issues and comments
        permissions: Bitmask of core.permissions.Permission values
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(255))
    permissions: Mapped[int] = mapped_column(Integer, default=int(Permission.NONE))
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    created_issues: Mapped[list["Issue"]] = relationship("Issue", back_populates="created_by")
    comments: Mapped[list["IssueComment"]] = relationship("IssueComment", back_populates="user")

    def has_permission(
        self, required: Permission | list[Permission], mode: PermissionMode = "and"
    ) -> bool:
        """Convenience wrapper around core.permissions.has_permission."""
        return has_permission(self.permissions or 0, required, mode)
