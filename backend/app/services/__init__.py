"""
Backend services for the media issue tracker.
"""

from . import comment_service, issue_service

__all__ = [
    "comment_service",
    "issue_service",
]
