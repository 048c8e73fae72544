import pytest
import requests

from core.api import tmdb_api
from core.constants import MediaType
from core.exceptions import UpstreamError


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def json(self):
        return self._payload


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get inside the TMDB client and record calls."""
    state = {"response": FakeResponse(200), "calls": []}

    def _get(url, headers=None, params=None, timeout=None):
        state["calls"].append({"url": url, "headers": headers, "params": params})
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setattr(tmdb_api.requests, "get", _get)
    return state


def test_movie_details_are_normalized(fake_get):
    fake_get["response"] = FakeResponse(
        200,
        {
            "id": 550,
            "title": "Fight Club",
            "release_date": "1999-10-15",
            "poster_path": "/p.jpg",
            "backdrop_path": "/b.jpg",
            "overview": "...",
        },
    )

    details = tmdb_api.get_media_details(550, "movie")

    assert details["title"] == "Fight Club"
    assert details["release_date"] == "1999-10-15"
    assert details["media_type"] == "movie"
    assert fake_get["calls"][0]["url"].endswith("/movie/550")


def test_tv_details_use_name_and_first_air_date(fake_get):
    fake_get["response"] = FakeResponse(
        200, {"id": 1399, "name": "Game of Thrones", "first_air_date": "2011-04-17"}
    )

    details = tmdb_api.get_media_details(1399, MediaType.TV)

    assert details["title"] == "Game of Thrones"
    assert details["release_date"] == "2011-04-17"
    assert fake_get["calls"][0]["url"].endswith("/tv/1399")


def test_unknown_id_returns_none(fake_get):
    fake_get["response"] = FakeResponse(404)

    assert tmdb_api.get_media_details(1, "movie") is None


@pytest.mark.parametrize("status_code", [401, 500, 503])
def test_error_statuses_raise(fake_get, status_code):
    fake_get["response"] = FakeResponse(status_code)

    with pytest.raises(UpstreamError):
        tmdb_api.get_media_details(1, "movie")


def test_network_error_raises(fake_get):
    fake_get["response"] = requests.ConnectionError("boom")

    with pytest.raises(UpstreamError):
        tmdb_api.get_media_details(1, "movie")


def test_auth_placement():
    headers, params = tmdb_api._get_auth("a" * 32)
    assert params == {"api_key": "a" * 32}
    assert "Authorization" not in headers

    token = "eyJ" + "x" * 100
    headers, params = tmdb_api._get_auth(token)
    assert params == {}
    assert headers["Authorization"] == f"Bearer {token}"


def test_image_url():
    assert tmdb_api.image_url(None, "w500") is None
    assert tmdb_api.image_url("/poster.jpg", "w500") == "https://image.tmdb.org/t/p/w500/poster.jpg"
