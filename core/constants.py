"""
Application constants for the media issue tracker.

Contains the issue type/status enums, the issue type label table and the
list sort keys.
"""

from enum import Enum, IntEnum


# =============================================================================
# Issues
# =============================================================================


class IssueType(IntEnum):
    PLAYBACK = 1
    SYNC = 2
    SUBTITLES = 3
    OTHER = 4


class IssueStatus(IntEnum):
    OPEN = 1
    RESOLVED = 2


ISSUE_TYPE_NAMES = {
    IssueType.SYNC: "Audio Sync",
    IssueType.PLAYBACK: "Media Playback",
    IssueType.SUBTITLES: "Subtitles",
    IssueType.OTHER: "Other",
}

ISSUE_TYPE_DESCRIPTIONS = {
    IssueType.SYNC: "Audio is out of sync with the video or becomes out of sync over a period of time.",
    IssueType.PLAYBACK: "Trying to playback the media results in an error or a black screen.",
    IssueType.SUBTITLES: "Subtitles are missing from the media.",
    IssueType.OTHER: "A reason not listed above. Please specify below.",
}

# Path tokens accepted by the status transition endpoint
STATUS_TOKENS = {
    "open": IssueStatus.OPEN,
    "resolved": IssueStatus.RESOLVED,
}

# Sort keys understood by the list endpoint; anything else sorts by creation
SORT_MODIFIED = "modified"
SORT_ADDED = "added"

DEFAULT_TAKE = 10
DEFAULT_SKIP = 0

# problemSeason / problemEpisode value meaning "all"
ALL_SEASONS = 0
ALL_EPISODES = 0


# =============================================================================
# Media
# =============================================================================


class MediaType(str, Enum):
    MOVIE = "movie"
    TV = "tv"


TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_SITE_URL = "https://www.themoviedb.org"
POSTER_SIZE = "w600_and_h900_bestv2"
BACKDROP_SIZE = "w1920_and_h800_multi_faces"
