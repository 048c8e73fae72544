from core.api import tmdb_api
from core.exceptions import UpstreamError


def test_movie_details(client, auth_headers, viewer, stub_tmdb):
    resp = client.get("/api/v1/movie/42", headers=auth_headers(viewer))

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["title"] == "Test Movie"
    assert data["releaseDate"] == "2020-05-01"
    assert data["posterPath"] == "/poster.jpg"
    assert stub_tmdb == [(42, "movie")]


def test_tv_details(client, auth_headers, viewer, stub_tmdb):
    resp = client.get("/api/v1/tv/1399", headers=auth_headers(viewer))

    assert resp.status_code == 200
    assert resp.json()["mediaType"] == "tv"
    assert stub_tmdb == [(1399, "tv")]


def test_unknown_media(monkeypatch, client, auth_headers, viewer):
    monkeypatch.setattr(tmdb_api, "get_media_details", lambda tmdb_id, media_type: None)

    resp = client.get("/api/v1/movie/5", headers=auth_headers(viewer))

    assert resp.status_code == 404
    assert resp.json() == {"status": 404, "message": "Unable to find movie with id 5."}


def test_upstream_failure(monkeypatch, client, auth_headers, viewer):
    def failing_lookup(tmdb_id, media_type):
        raise UpstreamError()

    monkeypatch.setattr(tmdb_api, "get_media_details", failing_lookup)

    resp = client.get("/api/v1/movie/5", headers=auth_headers(viewer))

    assert resp.status_code == 502
    assert resp.json()["message"] == "Unable to retrieve media details."


def test_media_details_require_login(client, stub_tmdb):
    resp = client.get("/api/v1/movie/42")

    assert resp.status_code == 401
    assert stub_tmdb == []
