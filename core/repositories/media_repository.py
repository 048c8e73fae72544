"""Media repository."""

from core.models import Media

from .base import BaseRepository


class MediaRepository(BaseRepository[Media]):
    """Repository for Media lookups."""

    model = Media
