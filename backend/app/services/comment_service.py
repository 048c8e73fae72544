"""
Issue comment service.

Editing is limited to the comment's author; deleting is also open to
issue managers.
"""

from sqlalchemy.orm import Session

from core.exceptions import ForbiddenError, NotFoundError
from core.logging import get_logger
from core.permissions import Permission
from core.repositories import IssueCommentRepository

from ..models import IssueComment, User

logger = get_logger("api.comment_service")


def get_comment(db: Session, comment_id: int) -> IssueComment:
    comment = IssueCommentRepository(db).get_with_author(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found.")
    return comment


def update_comment(db: Session, user: User, comment_id: int, message: str) -> IssueComment:
    """
    Replace the message of a comment.

    Raises:
        NotFoundError: If the comment does not exist.
        ForbiddenError: If the user did not write the comment.
    """
    comment = get_comment(db, comment_id)

    if comment.user_id != user.id:
        raise ForbiddenError("You can only edit your own comments.")

    comment.message = message
    IssueCommentRepository(db).save(comment)
    logger.info("issue_comment_updated", comment_id=comment.id, issue_id=comment.issue_id)
    return comment


def delete_comment(db: Session, user: User, comment_id: int) -> None:
    """
    Delete a comment.

    Raises:
        NotFoundError: If the comment does not exist.
        ForbiddenError: If the user is neither the author nor an issue manager.
    """
    comment = get_comment(db, comment_id)

    if comment.user_id != user.id and not user.has_permission(Permission.MANAGE_ISSUES):
        raise ForbiddenError("You do not have permission to delete this comment.")

    issue_id = comment.issue_id
    IssueCommentRepository(db).delete(comment)
    logger.info("issue_comment_deleted", comment_id=comment_id, issue_id=issue_id)
