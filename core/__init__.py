"""
Media Issue Tracker Core Library.

This package provides the core functionality for the issue tracker,
including database management, models, repositories, the TMDB client,
permissions and logging.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import Issue, IssueComment, Media, User
    from core.repositories import IssueRepository, MediaRepository

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "0.1.0"
