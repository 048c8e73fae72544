"""
Issue endpoints: list, create, fetch, comment, status changes and delete.

Permission gates are declared per route; ownership rules live in
services.issue_service.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from core.constants import DEFAULT_SKIP, DEFAULT_TAKE
from core.permissions import Permission

from ..auth.dependencies import require_permissions, validate_csrf
from ..database import get_db
from ..models import User
from ..schemas import (
    CommentRequest,
    IssueCreateRequest,
    IssueResponse,
    IssueResultsResponse,
    PageInfo,
)
from ..services import issue_service

router = APIRouter(prefix="/issue", tags=["issues"])

any_issue_permission = require_permissions(
    Permission.MANAGE_ISSUES,
    Permission.VIEW_ISSUES,
    Permission.CREATE_ISSUES,
    mode="or",
)
manage_or_create = require_permissions(
    Permission.MANAGE_ISSUES, Permission.CREATE_ISSUES, mode="or"
)
manage_only = require_permissions(Permission.MANAGE_ISSUES)


@router.get("", response_model=IssueResultsResponse)
def list_issues(
    take: int = Query(DEFAULT_TAKE, ge=1, le=100, description="Page size"),
    skip: int = Query(DEFAULT_SKIP, ge=0, description="Number of issues to skip"),
    sort: str | None = Query(None, description="'modified' for last updated, otherwise creation date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(any_issue_permission),
):
    """List issues, newest first."""
    issues, page_info = issue_service.list_issues(db, take=take, skip=skip, sort=sort)
    return IssueResultsResponse(
        page_info=PageInfo(**page_info),
        results=[IssueResponse.model_validate(issue) for issue in issues],
    )


@router.post("", response_model=IssueResponse, dependencies=[Depends(validate_csrf)])
def create_issue(
    request: IssueCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_or_create),
):
    """Report a new issue against a media item."""
    issue = issue_service.create_issue(db, current_user, request)
    return IssueResponse.model_validate(issue)


@router.get("/{issue_id}", response_model=IssueResponse)
def get_issue(
    issue_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(any_issue_permission),
):
    """Get an issue with its comments, creator and media."""
    issue = issue_service.get_issue(db, current_user, issue_id)
    return IssueResponse.model_validate(issue)


@router.delete(
    "/{issue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(validate_csrf)],
)
def delete_issue(
    issue_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_or_create),
):
    """Delete an issue and its comments."""
    issue_service.delete_issue(db, current_user, issue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Must stay above the /{issue_id}/{status_token} route
@router.post("/{issue_id}/comment", response_model=IssueResponse, dependencies=[Depends(validate_csrf)])
def add_comment(
    issue_id: int,
    request: CommentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_or_create),
):
    """Add a comment to an issue."""
    issue = issue_service.add_comment(db, current_user, issue_id, request.message)
    return IssueResponse.model_validate(issue)


@router.post("/{issue_id}/{status_token}", response_model=IssueResponse, dependencies=[Depends(validate_csrf)])
def update_issue_status(
    issue_id: int,
    status_token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_only),
):
    """Resolve or reopen an issue."""
    issue = issue_service.update_status(db, issue_id, status_token)
    return IssueResponse.model_validate(issue)
