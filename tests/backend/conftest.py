from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.auth.jwt import create_access_token
from backend.app.database import get_db
from backend.app.main import create_app
from core.api import tmdb_api
from core.permissions import Permission


@pytest.fixture
def client(session_factory) -> Iterator[TestClient]:
    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = session_factory()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Build a bearer Authorization header for a user."""

    def _auth_headers(user) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers


@pytest.fixture
def manager(make_user):
    return make_user(Permission.MANAGE_ISSUES, display_name="Manager")


@pytest.fixture
def reporter(make_user):
    return make_user(Permission.CREATE_ISSUES, display_name="Reporter")


@pytest.fixture
def other_reporter(make_user):
    return make_user(Permission.CREATE_ISSUES, display_name="Other Reporter")


@pytest.fixture
def viewer(make_user):
    return make_user(Permission.VIEW_ISSUES, display_name="Viewer")


@pytest.fixture
def requester(make_user):
    """A user with no issue permissions at all."""
    return make_user(Permission.REQUEST, display_name="Requester")


@pytest.fixture
def movie(make_media):
    return make_media(tmdb_id=42)


@pytest.fixture
def fake_details():
    return {
        "id": 42,
        "media_type": "movie",
        "title": "Test Movie",
        "release_date": "2020-05-01",
        "poster_path": "/poster.jpg",
        "backdrop_path": "/backdrop.jpg",
        "overview": "A movie used in tests.",
    }


@pytest.fixture
def stub_tmdb(monkeypatch, fake_details):
    """Replace the TMDB lookup with a canned response keyed on media type."""
    calls = []

    def fake_get_media_details(tmdb_id, media_type):
        calls.append((tmdb_id, str(getattr(media_type, "value", media_type))))
        details = dict(fake_details)
        details["id"] = tmdb_id
        details["media_type"] = str(getattr(media_type, "value", media_type))
        return details

    monkeypatch.setattr(tmdb_api, "get_media_details", fake_get_media_details)
    return calls
