"""
Issue repository with paginated listing and eager-loaded lookups.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from core.constants import SORT_MODIFIED
from core.models import Issue, IssueComment

from .base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """
    Repository for Issue operations.

    Key features:
    - list_page: one count query plus one windowed select
    - get_one_or_fail: comments, comment authors, creator and media in
      a fixed number of queries (not N+1)
    """

    model = Issue

    def _full_load_options(self):
        return (
            selectinload(Issue.comments).selectinload(IssueComment.user),
            selectinload(Issue.created_by),
            selectinload(Issue.media),
        )

    def list_page(
        self,
        skip: int = 0,
        take: int = 10,
        sort: str | None = None,
    ) -> tuple[list[Issue], int]:
        """
        Get a window of issues and the total count.

        Args:
            skip: Number of issues to skip
            take: Page size
            sort: "modified" orders by last update, anything else by creation

        Returns:
            Tuple of (issues, total_count)
        """
        if sort == SORT_MODIFIED:
            order = (Issue.updated_at.desc(), Issue.id.desc())
        else:
            order = (Issue.created_at.desc(), Issue.id.desc())

        total = self.count()

        stmt = (
            select(Issue)
            .options(*self._full_load_options())
            .order_by(*order)
            .offset(skip)
            .limit(take)
        )
        issues = list(self.session.scalars(stmt).all())
        return issues, total

    def get_one_or_fail(self, issue_id: int) -> Issue:
        """
        Get an issue with its relations or raise.

        Raises:
            sqlalchemy.exc.NoResultFound: If the issue does not exist.
        """
        stmt = (
            select(Issue)
            .options(*self._full_load_options())
            .where(Issue.id == issue_id)
        )
        return self.session.scalars(stmt).one()

    def add_comment(self, issue: Issue, user_id: int, message: str) -> IssueComment:
        """Append a comment to an issue and persist it."""
        comment = IssueComment(user_id=user_id, message=message)
        issue.comments.append(comment)
        issue.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return comment
