"""
SQLAlchemy ORM models used by the backend.

Re-exports core.models:
    from ..models import Issue, IssueComment, Media, User
"""

from core.models import Base, Issue, IssueComment, Media, User

__all__ = [
    "Base",
    "User",
    "Media",
    "Issue",
    "IssueComment",
]
