"""
Presentation helpers turning issues and media details into template data.
"""

from datetime import datetime

from core.api.tmdb_api import image_url
from core.constants import (
    BACKDROP_SIZE,
    ISSUE_TYPE_NAMES,
    POSTER_SIZE,
    TMDB_SITE_URL,
    IssueStatus,
    IssueType,
    MediaType,
)
from core.permissions import Permission

from ..models import Issue, User

# Toast keys carried across POST/redirect/GET as ?toast=<key>
TOASTS = {
    "description_updated": ("Successfully edited the issue description.", "success"),
    "description_failed": ("Something went wrong editing the description.", "error"),
    "status_updated": ("Issue status updated.", "success"),
    "status_failed": ("Something went wrong updating the issue status.", "error"),
    "comment_failed": ("Something went wrong adding the comment.", "error"),
}


def toast_for(key: str | None) -> dict | None:
    if key not in TOASTS:
        return None
    message, appearance = TOASTS[key]
    return {"message": message, "appearance": appearance}


def format_timestamp(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else ""


def issue_type_label(issue_type: int) -> str:
    try:
        return ISSUE_TYPE_NAMES[IssueType(issue_type)]
    except ValueError:
        return "Unknown"


def status_badge(status: int) -> dict:
    if status == IssueStatus.RESOLVED:
        return {"label": "Resolved", "badge": "success"}
    return {"label": "Open", "badge": "primary"}


def problem_scope(issue: Issue) -> list[tuple[str, str]]:
    """
    Season/episode facts for TV issues.

    0 means the problem applies to all seasons (or all episodes). The
    episode fact is only shown once a specific season is chosen.
    """
    if issue.media is None or issue.media.media_type != MediaType.TV.value:
        return []

    season = issue.problem_season or 0
    facts = [("Problem Season", f"Season {season}" if season > 0 else "All Seasons")]
    if season > 0:
        episode = issue.problem_episode or 0
        facts.append(("Problem Episode", f"Episode {episode}" if episode > 0 else "All Episodes"))
    return facts


def media_heading(details: dict) -> str:
    year = (details.get("release_date") or "")[:4]
    return f"{details['title']} ({year})" if year else details["title"]


def issue_summary(issue: Issue) -> dict:
    """One row of the issue list."""
    return {
        "id": issue.id,
        "type_label": issue_type_label(issue.issue_type),
        "status": status_badge(issue.status),
        "media_type": issue.media.media_type if issue.media else None,
        "tmdb_id": issue.media.tmdb_id if issue.media else None,
        "problem_scope": problem_scope(issue),
        "created_by": issue.created_by.display_name if issue.created_by else "",
        "comment_count": len(issue.comments),
        "created_at": format_timestamp(issue.created_at),
        "updated_at": format_timestamp(issue.updated_at),
    }


def issue_detail_context(issue: Issue, details: dict, viewer: User) -> dict:
    """
    Everything the detail page renders.

    The first comment is the editable description; the rest form the
    conversation thread. Thread comments by the issue creator are rendered
    reversed, and the viewer's own comments are highlighted.
    """
    first_comment, *other_comments = issue.comments or [None]
    is_manager = viewer.has_permission(Permission.MANAGE_ISSUES)
    belongs_to_user = issue.created_by_id == viewer.id
    is_tv = issue.media.media_type == MediaType.TV.value

    thread = [
        {
            "id": comment.id,
            "message": comment.message,
            "author": comment.user.display_name if comment.user else "",
            "created_at": format_timestamp(comment.created_at),
            "is_reversed": comment.user_id == issue.created_by_id,
            "is_active_user": comment.user_id == viewer.id,
        }
        for comment in other_comments
    ]

    return {
        "issue": issue,
        "media_type_label": "Series" if is_tv else "Movie",
        "media_link": f"{TMDB_SITE_URL}/{'tv' if is_tv else 'movie'}/{details['id']}",
        "media_heading": media_heading(details),
        "poster_url": image_url(details.get("poster_path"), POSTER_SIZE),
        "backdrop_url": image_url(details.get("backdrop_path"), BACKDROP_SIZE),
        "created_by": issue.created_by.display_name,
        "created_at": format_timestamp(issue.created_at),
        "updated_at": format_timestamp(issue.updated_at),
        "description": first_comment.message if first_comment else "",
        "can_edit_description": first_comment is not None and first_comment.user_id == viewer.id,
        "comments": thread,
        "can_comment": is_manager or belongs_to_user,
        "can_manage": is_manager,
        "is_open": issue.status == IssueStatus.OPEN,
        "status": status_badge(issue.status),
        "type_label": issue_type_label(issue.issue_type),
        "problem_scope": problem_scope(issue),
        "service_url": issue.media.service_url,
        "service_label": "Open in Sonarr" if is_tv else "Open in Radarr",
    }
