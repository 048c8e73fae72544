"""
Repository pattern implementations for data access.

Repositories wrap a SQLAlchemy session and keep query construction out of
the services.

Usage:
    from core.repositories import IssueRepository
    from core.db import db

    with db.session() as session:
        repo = IssueRepository(session)
        issues, total = repo.list_page(skip=0, take=10)
"""

from .base import BaseRepository
from .issue_comment_repository import IssueCommentRepository
from .issue_repository import IssueRepository
from .media_repository import MediaRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "IssueRepository",
    "IssueCommentRepository",
    "MediaRepository",
    "UserRepository",
]
