"""
SQLAlchemy models for the media issue tracker.

Single source of truth for all database models.

Usage:
    from core.models import Issue, IssueComment, Media, User
"""

from .base import Base
from .issue import Issue, IssueComment
from .media import Media
from .user import User

__all__ = [
    "Base",
    "User",
    "Media",
    "Issue",
    "IssueComment",
]
