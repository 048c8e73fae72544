"""
Issue pages: paginated list and issue detail.

Pages call the issue services in-process. Every form POST redirects back
to the detail page (POST/redirect/GET), which loads the issue again and
shows the outcome as a toast.

Forms carry a csrf_token hidden field matching the csrf_token cookie set
when the detail page is rendered.
"""

import secrets

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from core.api import tmdb_api
from core.constants import SORT_ADDED, SORT_MODIFIED
from core.exceptions import IssueTrackerError
from core.logging import get_logger
from core.permissions import Permission

from ..auth.dependencies import CSRF_COOKIE, csrf_token_matches, get_optional_user
from ..config import get_settings
from ..database import get_db
from ..models import User
from ..services import comment_service, issue_service
from . import views
from .deps import templates

logger = get_logger("web.issues")

router = APIRouter(prefix="/issues", include_in_schema=False)

FILTERS = ("all", "open", "resolved")

ISSUE_PERMISSIONS = [Permission.MANAGE_ISSUES, Permission.VIEW_ISSUES, Permission.CREATE_ISSUES]


def _error_page(request: Request, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "error.html", {"status_code": status_code}, status_code=status_code
    )


def _gate(request: Request, user: User | None) -> HTMLResponse | None:
    """Error page for anonymous users (401) or users without issue access (403)."""
    if user is None:
        return _error_page(request, 401)
    if not user.has_permission(ISSUE_PERMISSIONS, mode="or"):
        return _error_page(request, 403)
    return None


def _csrf_failed(request: Request, csrf_token: str, issue_id: int) -> HTMLResponse | None:
    if csrf_token_matches(request, csrf_token):
        return None
    logger.warning("csrf_validation_failed", path=request.url.path, issue_id=issue_id)
    return _error_page(request, 403)


def _back_to_issue(issue_id: int, toast: str) -> RedirectResponse:
    return RedirectResponse(f"/issues/{issue_id}?toast={toast}", status_code=303)


@router.get("", response_class=HTMLResponse)
def issue_list(
    request: Request,
    page: int = Query(1, ge=1),
    current_filter: str = Query("open", alias="filter"),
    sort: str = Query(SORT_ADDED),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    """Paginated issue list with filter and sort controls."""
    denied = _gate(request, user)
    if denied is not None:
        return denied

    if current_filter not in FILTERS:
        current_filter = "open"
    if sort not in (SORT_ADDED, SORT_MODIFIED):
        sort = SORT_ADDED

    page_size = get_settings().issue_page_size
    # The filter only drives the select control; the list is not narrowed by status
    issues, page_info = issue_service.list_issues(
        db, take=page_size, skip=(page - 1) * page_size, sort=sort
    )

    return templates.TemplateResponse(
        request,
        "issues/list.html",
        {
            "issues": [views.issue_summary(issue) for issue in issues],
            "page_info": page_info,
            "current_filter": current_filter,
            "current_sort": sort,
            "has_previous": page > 1,
            "has_next": page < page_info["pages"],
            "page": page,
        },
    )


@router.get("/{issue_id}", response_class=HTMLResponse)
def issue_detail(
    request: Request,
    issue_id: int,
    toast: str | None = Query(None),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    """Issue detail with media context, comments and status controls."""
    denied = _gate(request, user)
    if denied is not None:
        return denied

    try:
        issue = issue_service.get_issue(db, user, issue_id)
        details = tmdb_api.get_media_details(issue.media.tmdb_id, issue.media.media_type)
    except IssueTrackerError as e:
        logger.info("issue_page_load_failed", issue_id=issue_id, error=e.message)
        return _error_page(request, 404)

    if details is None:
        return _error_page(request, 404)

    csrf_token = request.cookies.get(CSRF_COOKIE)
    issued_csrf = csrf_token is None
    if issued_csrf:
        csrf_token = secrets.token_urlsafe(32)

    context = views.issue_detail_context(issue, details, user)
    context["toast"] = views.toast_for(toast)
    context["csrf_token"] = csrf_token
    response = templates.TemplateResponse(request, "issues/detail.html", context)

    if issued_csrf:
        response.set_cookie(
            key=CSRF_COOKIE,
            value=csrf_token,
            httponly=False,
            samesite="lax",
            max_age=get_settings().access_token_expire_minutes * 60,
            path="/",
        )
    return response


@router.post("/{issue_id}/comment")
def post_comment(
    request: Request,
    issue_id: int,
    message: str = Form(""),
    csrf_token: str = Form(""),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    rejected = _csrf_failed(request, csrf_token, issue_id)
    if rejected is not None:
        return rejected

    if (
        user is None
        or not message.strip()
        or not user.has_permission([Permission.MANAGE_ISSUES, Permission.CREATE_ISSUES], mode="or")
    ):
        return _back_to_issue(issue_id, "comment_failed")

    try:
        issue_service.add_comment(db, user, issue_id, message)
    except IssueTrackerError as e:
        logger.info("issue_page_comment_failed", issue_id=issue_id, error=e.message)
        return _back_to_issue(issue_id, "comment_failed")

    return RedirectResponse(f"/issues/{issue_id}", status_code=303)


@router.post("/{issue_id}/status/{status_token}")
def post_status(
    request: Request,
    issue_id: int,
    status_token: str,
    csrf_token: str = Form(""),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    rejected = _csrf_failed(request, csrf_token, issue_id)
    if rejected is not None:
        return rejected

    if user is None or not user.has_permission(Permission.MANAGE_ISSUES):
        return _back_to_issue(issue_id, "status_failed")

    try:
        issue_service.update_status(db, issue_id, status_token)
    except IssueTrackerError as e:
        logger.info("issue_page_status_failed", issue_id=issue_id, error=e.message)
        return _back_to_issue(issue_id, "status_failed")

    return _back_to_issue(issue_id, "status_updated")


@router.post("/{issue_id}/description")
def post_description(
    request: Request,
    issue_id: int,
    message: str = Form(""),
    csrf_token: str = Form(""),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    """Edit the issue description, i.e. the first comment."""
    rejected = _csrf_failed(request, csrf_token, issue_id)
    if rejected is not None:
        return rejected

    if (
        user is None
        or not message.strip()
        or not user.has_permission([Permission.MANAGE_ISSUES, Permission.CREATE_ISSUES], mode="or")
    ):
        return _back_to_issue(issue_id, "description_failed")

    try:
        issue = issue_service.get_issue(db, user, issue_id)
        if not issue.comments:
            return _back_to_issue(issue_id, "description_failed")
        comment_service.update_comment(db, user, issue.comments[0].id, message)
    except IssueTrackerError as e:
        logger.info("issue_page_description_failed", issue_id=issue_id, error=e.message)
        return _back_to_issue(issue_id, "description_failed")

    return _back_to_issue(issue_id, "description_updated")
