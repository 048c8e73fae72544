"""
Domain exceptions raised by the issue services.

Each exception carries the HTTP status and the client-facing message the
shared error responder sends back as ``{"status": ..., "message": ...}``.
"""


class IssueTrackerError(Exception):
    """Base class for failures reported to the client as {status, message}."""

    status_code: int = 500
    default_message: str = "Something went wrong."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ForbiddenError(IssueTrackerError):
    status_code = 403
    default_message = "You do not have permission to access this endpoint."


class NotFoundError(IssueTrackerError):
    status_code = 404
    default_message = "Not found."


class IssueNotFoundError(IssueTrackerError):
    """
    Issue lookup failed.

    Reported as a 500 with a "not found" message whether the issue is
    missing or the lookup itself raised.
    """

    status_code = 500
    default_message = "Issue not found."


class ValidationFailedError(IssueTrackerError):
    status_code = 400
    default_message = "Invalid request."


class UpstreamError(IssueTrackerError):
    """A collaborating service (TMDB) failed."""

    status_code = 502
    default_message = "Unable to retrieve media details."


__all__ = [
    "IssueTrackerError",
    "ForbiddenError",
    "NotFoundError",
    "IssueNotFoundError",
    "ValidationFailedError",
    "UpstreamError",
]
