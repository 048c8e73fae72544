"""
Issue comment endpoints.

The issue detail page edits its description through PUT on the first
comment.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from core.permissions import Permission

from ..auth.dependencies import require_permissions, validate_csrf
from ..database import get_db
from ..models import User
from ..schemas import CommentRequest, IssueCommentResponse
from ..services import comment_service

router = APIRouter(prefix="/issueComment", tags=["issues"])


@router.get("/{comment_id}", response_model=IssueCommentResponse)
def get_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_permissions(
            Permission.MANAGE_ISSUES,
            Permission.VIEW_ISSUES,
            Permission.CREATE_ISSUES,
            mode="or",
        )
    ),
):
    comment = comment_service.get_comment(db, comment_id)
    return IssueCommentResponse.model_validate(comment)


@router.put("/{comment_id}", response_model=IssueCommentResponse, dependencies=[Depends(validate_csrf)])
def update_comment(
    comment_id: int,
    request: CommentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_permissions(Permission.MANAGE_ISSUES, Permission.CREATE_ISSUES, mode="or")
    ),
):
    """Edit a comment's message. Only the author may do this."""
    comment = comment_service.update_comment(db, current_user, comment_id, request.message)
    return IssueCommentResponse.model_validate(comment)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(validate_csrf)],
)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_permissions(Permission.MANAGE_ISSUES, Permission.CREATE_ISSUES, mode="or")
    ),
):
    comment_service.delete_comment(db, current_user, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
