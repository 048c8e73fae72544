"""Issue comment repository."""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from core.models import IssueComment

from .base import BaseRepository


class IssueCommentRepository(BaseRepository[IssueComment]):
    """Repository for IssueComment operations."""

    model = IssueComment

    def get_with_author(self, comment_id: int) -> IssueComment | None:
        """Get a comment with its author and owning issue loaded."""
        stmt = (
            select(IssueComment)
            .options(selectinload(IssueComment.user), selectinload(IssueComment.issue))
            .where(IssueComment.id == comment_id)
        )
        return self.session.scalars(stmt).first()
