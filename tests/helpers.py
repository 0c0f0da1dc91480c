"""Canned TMDb payloads and HTTP responses for the client/controller tests."""
from unittest.mock import Mock

import requests


def movie_payload(movie_id, title, **extra):
    """TMDb list-endpoint JSON for one movie."""
    data = {
        "id": movie_id,
        "title": title,
        "overview": f"{title} overview",
        "poster_path": f"/poster{movie_id}.jpg",
        "backdrop_path": None,
        "release_date": "2020-05-01",
        "vote_average": 7.5,
        "vote_count": 100,
        "popularity": 12.3,
        "genre_ids": [28],
        "original_language": "en",
        "adult": False,
    }
    data.update(extra)
    return data


def details_payload(movie_id, title, genres=(("Action", 28),), cast=("Lead Actor",), **extra):
    """`/movie/{id}` JSON with credits and videos appended."""
    data = movie_payload(movie_id, title, **extra)
    data.pop("genre_ids")
    data.update({
        "runtime": 120,
        "budget": 1000,
        "revenue": 5000,
        "genres": [{"id": gid, "name": name} for name, gid in genres],
        "production_companies": [{"id": 1, "name": "Studio"}],
        "credits": {"cast": [{"id": i, "name": n, "character": "X"} for i, n in enumerate(cast)]},
        "videos": {"results": [{"key": "abc123", "site": "YouTube", "type": "Trailer", "name": "Trailer"}]},
    })
    return data


def fake_response(payload=None, status_code=200):
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = payload if payload is not None else {}
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp
