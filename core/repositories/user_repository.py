"""User repository."""

from core.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User lookups during authentication."""

    model = User
