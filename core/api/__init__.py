# TMDB media details integration module

from .tmdb_api import get_media_details, image_url

__all__ = [
    "get_media_details",
    "image_url",
]
