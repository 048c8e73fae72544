"""
Media details endpoints backed by TMDB.
"""

from fastapi import APIRouter, Depends

from core.api import tmdb_api
from core.constants import MediaType
from core.exceptions import NotFoundError

from ..auth.dependencies import get_current_user
from ..models import User
from ..schemas import MediaDetailsResponse

router = APIRouter(tags=["media"])


def _details_or_404(tmdb_id: int, media_type: MediaType) -> MediaDetailsResponse:
    # Module attribute lookup keeps tmdb_api patchable in tests
    details = tmdb_api.get_media_details(tmdb_id, media_type)
    if details is None:
        raise NotFoundError(f"Unable to find {media_type.value} with id {tmdb_id}.")
    return MediaDetailsResponse(**details)


@router.get("/movie/{tmdb_id}", response_model=MediaDetailsResponse)
def get_movie(tmdb_id: int, current_user: User = Depends(get_current_user)):
    return _details_or_404(tmdb_id, MediaType.MOVIE)


@router.get("/tv/{tmdb_id}", response_model=MediaDetailsResponse)
def get_tv(tmdb_id: int, current_user: User = Depends(get_current_user)):
    return _details_or_404(tmdb_id, MediaType.TV)
