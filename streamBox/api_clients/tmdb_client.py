from __future__ import annotations

from typing import Any, Dict, List

import requests

from streamBox.core.models import CastMember, Genre, Movie, MoviePage, Video
from streamBox.settings import (
    HTTP_TIMEOUT,
    MAX_CAST,
    TMDB_API_KEY,
    TMDB_BASE_URL,
    TMDB_IMAGE_BASE_URL,
    TMDB_MIN_DELAY,
)
from streamBox.utils import log_debug, throttle
from streamBox.api_clients.errors import ApiError, MissingApiKeyError, RateLimitError


def _image(path: str | None) -> str:
    return f"{TMDB_IMAGE_BASE_URL}{path}" if path else ""


def transform_movie(api_movie: Dict[str, Any]) -> Movie:
    """List-endpoint JSON → `Movie`."""
    return Movie(
        id=api_movie["id"],
        title=api_movie.get("title") or "",
        overview=api_movie.get("overview") or "",
        poster_path=_image(api_movie.get("poster_path")),
        backdrop_path=_image(api_movie.get("backdrop_path")),
        release_date=api_movie.get("release_date") or "",
        vote_average=api_movie.get("vote_average") or 0,
        vote_count=api_movie.get("vote_count") or 0,
        popularity=api_movie.get("popularity") or 0,
        genre_ids=list(api_movie.get("genre_ids") or []),
        original_language=api_movie.get("original_language") or "en",
        adult=api_movie.get("adult") or False,
    )


def transform_movie_details(api_movie: Dict[str, Any]) -> Movie:
    """`/movie/{id}` JSON (with credits,videos appended) → `Movie`."""
    movie = transform_movie(api_movie)
    genres = [Genre(g["id"], g["name"]) for g in api_movie.get("genres") or []]
    movie.genres = genres
    movie.genre_ids = [g.id for g in genres]
    movie.runtime = api_movie.get("runtime")
    movie.budget = api_movie.get("budget")
    movie.revenue = api_movie.get("revenue")
    movie.production_companies = list(api_movie.get("production_companies") or [])
    movie.cast = [
        CastMember(
            id=c["id"],
            name=c.get("name", ""),
            character=c.get("character"),
            profile_path=_image(c.get("profile_path")) or None,
        )
        for c in ((api_movie.get("credits") or {}).get("cast") or [])[:MAX_CAST]
    ]
    movie.videos = [
        Video(key=v["key"], name=v.get("name"), site=v.get("site"), type=v.get("type"))
        for v in (api_movie.get("videos") or {}).get("results") or []
    ]
    return movie


class TMDBClient:
    """Thin wrapper around The Movie Database (TMDb) v3 REST API."""
    BASE_URL = TMDB_BASE_URL

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def __init__(self, api_key: str | None = None, session: requests.Session | None = None):
        self.api_key = api_key or TMDB_API_KEY
        if not self.api_key:
            raise MissingApiKeyError("No TMDB api key passed and TMDB_API_KEY not set")
        self.session = session or requests.Session()

    @throttle(min_delay=TMDB_MIN_DELAY)
    def _get(self, path: str, **params) -> Dict[str, Any]:
        params["api_key"] = self.api_key
        try:
            resp = self.session.get(f"{self.BASE_URL}{path}", params=params, timeout=HTTP_TIMEOUT)
        except requests.RequestException as exc:
            log_debug(f"TMDb network error on {path}: {exc}")
            raise ApiError(f"Network error while calling TMDb: {exc}") from exc

        if resp.status_code == 429:
            log_debug("TMDb rate limit reached.")
            raise RateLimitError("TMDb rate limit reached", status_code=429)
        try:
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as exc:
            log_debug(f"TMDb HTTP {resp.status_code} for {path}")
            raise ApiError(f"TMDb request failed ({resp.status_code})", resp.status_code) from exc
        except ValueError as exc:
            log_debug(f"TMDb returned non-JSON for {path}: {exc}")
            raise ApiError("TMDb returned an unreadable response") from exc

    def _page(self, path: str, page: int, **params) -> MoviePage:
        payload = self._get(path, page=page, **params)
        return MoviePage(
            page=payload.get("page", page),
            results=[transform_movie(m) for m in payload.get("results", [])],
            total_pages=payload.get("total_pages", 0),
            total_results=payload.get("total_results", 0),
        )

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------
    def get_trending_movies(self) -> List[Movie]:
        """This week's trending movies."""
        payload = self._get("/trending/movie/week")
        return [transform_movie(m) for m in payload.get("results", [])]

    def get_popular_movies(self, page: int = 1) -> MoviePage:
        return self._page("/movie/popular", page)

    def get_top_rated_movies(self, page: int = 1) -> MoviePage:
        return self._page("/movie/top_rated", page)

    def get_upcoming_movies(self, page: int = 1) -> MoviePage:
        return self._page("/movie/upcoming", page)

    def search_movies(self, query: str, page: int = 1) -> MoviePage:
        return self._page("/search/movie", page, query=query)

    def get_all_movies(self, page: int = 1) -> List[Movie]:
        """General listing – the popular movies of *page*."""
        return self.get_popular_movies(page).results

    def discover_by_genre(self, genre_id: int, page: int = 1) -> MoviePage:
        return self._page(
            "/discover/movie", page,
            with_genres=genre_id,
            sort_by="popularity.desc",
        )

    # ------------------------------------------------------------------
    # Single movie / reference data
    # ------------------------------------------------------------------
    def get_movie_details(self, movie_id: int) -> Movie:
        """Full details, top-10 cast and videos for *movie_id*."""
        payload = self._get(f"/movie/{movie_id}", append_to_response="credits,videos")
        return transform_movie_details(payload)

    def get_movie_by_id(self, movie_id: int) -> Movie:
        return self.get_movie_details(movie_id)

    def get_genres(self) -> List[Genre]:
        payload = self._get("/genre/movie/list")
        return [Genre(g["id"], g["name"]) for g in payload.get("genres", [])]
