"""
Base model class for SQLAlchemy ORM.

Re-exports the declarative Base from core.db so models import it from one place.
"""

from core.db import Base

__all__ = ["Base"]
