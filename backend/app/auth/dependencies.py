"""
Authentication dependencies for FastAPI routes.

Supports both:
- Bearer token in Authorization header (for API clients)
- HttpOnly cookie (for the browser pages)

Routes declare the permissions they need with ``require_permissions``:

    @router.get("", dependencies=[Depends(require_permissions(
        Permission.MANAGE_ISSUES, Permission.VIEW_ISSUES, mode="or"))])

State-changing routes also declare ``Depends(validate_csrf)``. Cookie-authenticated
requests must echo the csrf_token cookie in an X-CSRF-Token header or a
csrf_token form field; bearer-token clients are exempt.
"""

import secrets
from collections.abc import Callable

from fastapi import Cookie, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.exceptions import ForbiddenError
from core.logging import get_logger
from core.permissions import Permission, PermissionMode, has_permission
from core.repositories import UserRepository

from ..database import get_db
from ..models import User
from .jwt import decode_access_token

logger = get_logger("auth")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)

ACCESS_TOKEN_COOKIE = "access_token"
CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"
CSRF_FORM_FIELD = "csrf_token"

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _user_from_token(db: Session, token: str) -> User | None:
    try:
        payload = decode_access_token(token)
    except ValueError:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    try:
        return UserRepository(db).get_by_id(int(user_id))
    except ValueError:
        return None


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str:
    """
    Extract JWT token from request.

    Checks the Authorization header first, then the access_token cookie.
    """
    if token_header:
        return token_header
    if access_token_cookie:
        return access_token_cookie

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated user from a bearer token or cookie, or raise 401."""
    user = _user_from_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    return user


def get_optional_user(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
    db: Session = Depends(get_db),
) -> User | None:
    """
    Get the current user if authenticated, otherwise return None.

    Used by the HTML pages, which render an error page instead of a JSON 401.
    """
    token = token_header or access_token_cookie
    if not token:
        return None
    return _user_from_token(db, token)


def require_permissions(
    *permissions: Permission, mode: PermissionMode = "and"
) -> Callable[..., User]:
    """
    Build a dependency that authenticates the caller and checks permissions.

    Args:
        permissions: Permissions the caller must hold.
        mode: "and" requires all of them, "or" requires at least one.

    Returns:
        A FastAPI dependency returning the authenticated user.
    """

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not has_permission(current_user.permissions or 0, permissions, mode):
            logger.info(
                "permission_denied",
                user_id=current_user.id,
                required=[p.name for p in permissions],
                mode=mode,
            )
            raise ForbiddenError()
        return current_user

    return dependency


def csrf_token_matches(request: Request, submitted: str | None = None) -> bool:
    """
    Double-submit cookie check.

    Only requests authenticated by the access_token cookie are checked; a
    bearer header or no credentials at all passes (the auth gate handles
    the latter).

    Args:
        request: Incoming request.
        submitted: Token from a csrf_token form field, if the caller parsed one.
            The X-CSRF-Token header takes precedence.
    """
    if request.headers.get("authorization", "").lower().startswith("bearer "):
        return True
    if not request.cookies.get(ACCESS_TOKEN_COOKIE):
        return True

    expected = request.cookies.get(CSRF_COOKIE)
    submitted = request.headers.get(CSRF_HEADER) or submitted
    if not expected or not submitted:
        return False
    return secrets.compare_digest(expected, submitted)


async def validate_csrf(request: Request) -> None:
    """Reject cookie-authenticated writes without a matching CSRF token (403)."""
    submitted = None
    if request.headers.get("content-type", "").startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        value = form.get(CSRF_FORM_FIELD)
        submitted = value if isinstance(value, str) else None

    if not csrf_token_matches(request, submitted):
        logger.warning("csrf_validation_failed", path=request.url.path, method=request.method)
        raise ForbiddenError("CSRF token missing or invalid.")


__all__ = [
    "csrf_token_matches",
    "get_current_user",
    "get_optional_user",
    "get_token_from_request",
    "require_permissions",
    "validate_csrf",
]
