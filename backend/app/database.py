"""
Database session dependency for the backend.

Re-exports core.db. Initialization happens explicitly in the application
startup hook, not at import time.
"""

from core.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
