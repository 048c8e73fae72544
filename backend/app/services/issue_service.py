"""
Issue service - bridges FastAPI endpoints and HTML pages with the issue store.

Route-level permission gates run before these functions; the rules here
are the ownership checks that depend on the loaded issue.
"""

import math

from sqlalchemy.orm import Session

from core.constants import STATUS_TOKENS, IssueStatus
from core.exceptions import (
    ForbiddenError,
    IssueNotFoundError,
    NotFoundError,
    ValidationFailedError,
)
from core.logging import LogContext, get_logger
from core.permissions import Permission
from core.repositories import IssueRepository, MediaRepository

from ..models import Issue, IssueComment, User
from ..schemas import IssueCreateRequest

logger = get_logger("api.issue_service")


def build_page_info(total: int, page_size: int, skip: int) -> dict:
    """
    Compute pagination metadata for a result window.

    Args:
        total: Total number of matching issues.
        page_size: Requested window size (take).
        skip: Number of issues skipped.

    Returns:
        Dict with pages, page_size, results and the 1-based current page.
    """
    return {
        "pages": math.ceil(total / page_size) if page_size > 0 else 0,
        "page_size": page_size,
        "results": total,
        "page": (skip // page_size) + 1 if page_size > 0 else 1,
    }


def list_issues(
    db: Session, take: int = 10, skip: int = 0, sort: str | None = None
) -> tuple[list[Issue], dict]:
    """
    Get one page of issues and its page info.

    Args:
        db: Database session.
        take: Page size.
        skip: Number of issues to skip.
        sort: "modified" sorts by last update, anything else by creation date.

    Returns:
        Tuple of (issues, page_info).
    """
    issues, total = IssueRepository(db).list_page(skip=skip, take=take, sort=sort)
    return issues, build_page_info(total, take, skip)


def create_issue(db: Session, user: User, request: IssueCreateRequest) -> Issue:
    """
    Create an issue against a media item with the message as its first comment.

    Raises:
        NotFoundError: If the media does not exist. Nothing is persisted.
    """
    media = MediaRepository(db).get_by_id(request.media_id)
    if media is None:
        logger.info("issue_create_unknown_media", media_id=request.media_id)
        raise NotFoundError("Media does not exist.")

    issue = Issue(
        created_by_id=user.id,
        issue_type=int(request.issue_type),
        status=int(IssueStatus.OPEN),
        problem_season=request.problem_season,
        problem_episode=request.problem_episode,
        media=media,
        comments=[IssueComment(user_id=user.id, message=request.message)],
    )
    IssueRepository(db).save(issue)

    logger.info(
        "issue_created",
        issue_id=issue.id,
        media_id=media.id,
        issue_type=request.issue_type.name,
        user_id=user.id,
    )
    return issue


def _load_issue(db: Session, issue_id: int, event: str) -> Issue:
    """Load an issue with its relations; any failure is reported as IssueNotFoundError."""
    try:
        return IssueRepository(db).get_one_or_fail(issue_id)
    except Exception as e:
        logger.debug(event, issue_id=issue_id, error=str(e))
        raise IssueNotFoundError() from e


def can_view(user: User, issue: Issue) -> bool:
    return issue.created_by_id == user.id or user.has_permission(
        [Permission.MANAGE_ISSUES, Permission.VIEW_ISSUES], mode="or"
    )


def is_owner_or_manager(user: User, issue: Issue) -> bool:
    return issue.created_by_id == user.id or user.has_permission(Permission.MANAGE_ISSUES)


def get_issue(db: Session, user: User, issue_id: int) -> Issue:
    """
    Get an issue with comments, comment authors, creator and media.

    Raises:
        IssueNotFoundError: If the issue cannot be loaded.
        ForbiddenError: If the user is neither the creator nor an issue viewer/manager.
    """
    issue = _load_issue(db, issue_id, "issue_lookup_failed")

    if not can_view(user, issue):
        raise ForbiddenError("You do not have permission to view this issue.")

    return issue


def add_comment(db: Session, user: User, issue_id: int, message: str) -> Issue:
    """
    Append a comment to an issue.

    Raises:
        IssueNotFoundError: If the issue cannot be loaded.
        ForbiddenError: If the user is neither the creator nor an issue manager.
    """
    issue = _load_issue(db, issue_id, "issue_comment_failed")

    if not is_owner_or_manager(user, issue):
        raise ForbiddenError("You do not have permission to comment on this issue.")

    with LogContext(issue_id=issue.id, user_id=user.id):
        comment = IssueRepository(db).add_comment(issue, user.id, message)
        logger.info("issue_comment_added", comment_id=comment.id)

    return issue


def update_status(db: Session, issue_id: int, status_token: str) -> Issue:
    """
    Move an issue to the status named by a path token ("open" or "resolved").

    Setting the status an issue already has is allowed.

    Raises:
        IssueNotFoundError: If the issue cannot be loaded.
        ValidationFailedError: If the token is not a known status.
    """
    issue = _load_issue(db, issue_id, "issue_status_update_failed")

    new_status = STATUS_TOKENS.get(status_token)
    if new_status is None:
        raise ValidationFailedError("You must provide a valid status")

    previous = IssueStatus(issue.status)
    issue.status = int(new_status)
    IssueRepository(db).save(issue)

    logger.info(
        "issue_status_changed",
        issue_id=issue.id,
        previous=previous.name,
        status=new_status.name,
    )
    return issue


def delete_issue(db: Session, user: User, issue_id: int) -> None:
    """
    Delete an issue and its comments.

    Raises:
        IssueNotFoundError: If the issue cannot be loaded.
        ForbiddenError: If the user is neither the creator nor an issue manager.
    """
    issue = _load_issue(db, issue_id, "issue_delete_failed")

    if not is_owner_or_manager(user, issue):
        raise ForbiddenError("You do not have permission to delete this issue.")

    IssueRepository(db).delete(issue)
    logger.info("issue_deleted", issue_id=issue_id, user_id=user.id)
