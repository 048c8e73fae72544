"""TMDB client used to look up rich movie and TV metadata for a media item."""

import requests  # type: ignore[import-untyped]

from core.config import get_settings
from core.constants import TMDB_IMAGE_BASE_URL, MediaType
from core.exceptions import UpstreamError
from core.logging import get_logger, log_timing

logger = get_logger("tmdb")


def _get_auth(api_key: str) -> tuple[dict[str, str], dict[str, str]]:
    """
    Build (headers, params) for a TMDB request.

    v3 keys (32 hex chars) go in the query string, v4 read access tokens
    in a Bearer header.
    """
    headers = {"Accept": "application/json", "User-Agent": "MediaIssueTracker/1.0"}
    if len(api_key) > 40:
        headers["Authorization"] = f"Bearer {api_key}"
        return headers, {}
    return headers, {"api_key": api_key}


def _normalize(payload: dict, media_type: MediaType) -> dict:
    """Flatten movie and TV payloads into one shape."""
    if media_type == MediaType.MOVIE:
        title = payload.get("title")
        release_date = payload.get("release_date")
    else:
        title = payload.get("name")
        release_date = payload.get("first_air_date")

    return {
        "id": payload.get("id"),
        "media_type": media_type.value,
        "title": title or "",
        "release_date": release_date or None,
        "poster_path": payload.get("poster_path"),
        "backdrop_path": payload.get("backdrop_path"),
        "overview": payload.get("overview"),
    }


@log_timing("tmdb_details_lookup", logger=logger)
def get_media_details(tmdb_id: int, media_type: MediaType | str) -> dict | None:
    """
    Fetch movie or TV details from TMDB.

    Args:
        tmdb_id: TMDB identifier of the movie or show.
        media_type: "movie" or "tv".

    Returns:
        Normalized details dict, or None when TMDB does not know the id.

    Raises:
        UpstreamError: On network errors, auth failures or unexpected statuses.
    """
    media_type = MediaType(media_type)
    settings = get_settings()
    headers, params = _get_auth(settings.tmdb_api_key)
    url = f"{settings.tmdb_base_url.rstrip('/')}/{media_type.value}/{tmdb_id}"

    try:
        response = requests.get(url, headers=headers, params=params, timeout=settings.tmdb_timeout)
    except requests.RequestException as e:
        logger.error("request_exception", error=str(e), url=url)
        raise UpstreamError() from e

    if response.status_code == 404:
        logger.debug("api_not_found", tmdb_id=tmdb_id, media_type=media_type.value)
        return None
    if response.status_code == 401:
        logger.error("api_auth_failed", url=url)
        raise UpstreamError()
    if response.status_code != 200:
        logger.error("api_error", status=response.status_code, url=url)
        raise UpstreamError()

    return _normalize(response.json(), media_type)


def image_url(path: str | None, size: str) -> str | None:
    """Build a TMDB image URL for a poster/backdrop path."""
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{size}/{path.lstrip('/')}"
