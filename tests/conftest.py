"""
Pytest fixtures for the media issue tracker tests.

Every test gets a fresh in-memory SQLite database.
"""

import os
import sys
from datetime import datetime, timedelta

# Settings are cached on first use; point them at throwaway values before any import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256-signing"
os.environ["CREATE_TABLES_ON_STARTUP"] = "true"

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from core.constants import IssueStatus, IssueType, MediaType  # noqa: E402
from core.db import Base, build_engine  # noqa: E402
from core.models import Issue, IssueComment, Media, User  # noqa: E402
from core.permissions import Permission  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_db):
    TestingSessionLocal, _ = test_db
    return TestingSessionLocal


@pytest.fixture
def test_session(session_factory):
    """Get a test session from the test database."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def make_user(session_factory):
    """Factory creating a committed user with the given permission bitmask."""
    counter = {"n": 0}

    def _make_user(permissions=Permission.NONE, display_name=None):
        counter["n"] += 1
        n = counter["n"]
        session = session_factory()
        user = User(
            email=f"user{n}@example.com",
            display_name=display_name or f"User {n}",
            permissions=int(permissions),
        )
        session.add(user)
        session.commit()
        session.close()
        return user

    return _make_user


@pytest.fixture
def make_media(session_factory):
    """Factory creating a committed media item."""

    def _make_media(tmdb_id=42, media_type=MediaType.MOVIE, service_url=None):
        session = session_factory()
        media = Media(tmdb_id=tmdb_id, media_type=media_type.value, service_url=service_url)
        session.add(media)
        session.commit()
        session.close()
        return media

    return _make_media


@pytest.fixture
def make_issue(session_factory):
    """
    Factory creating a committed issue.

    ``days`` offsets created_at/updated_at from a fixed base time so list
    ordering is deterministic. Extra comments are (user, message) pairs.
    """

    def _make_issue(
        media,
        creator,
        message="Something is wrong",
        issue_type=IssueType.PLAYBACK,
        status=IssueStatus.OPEN,
        days=0,
        problem_season=0,
        problem_episode=0,
        comments=(),
    ):
        session = session_factory()
        timestamp = BASE_TIME + timedelta(days=days)
        issue = Issue(
            media_id=media.id,
            created_by_id=creator.id,
            issue_type=int(issue_type),
            status=int(status),
            problem_season=problem_season,
            problem_episode=problem_episode,
            created_at=timestamp,
            updated_at=timestamp,
            comments=[IssueComment(user_id=creator.id, message=message)]
            + [IssueComment(user_id=user.id, message=text) for user, text in comments],
        )
        session.add(issue)
        session.commit()
        session.close()
        return issue

    return _make_issue
