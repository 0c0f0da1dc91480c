"""Screen-level operations.

Every front end (CLI today, Qt workers for background loads) goes through
these functions; none of them touch `kv_db` or `requests` directly.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from streamBox.api_clients import ApiError, AuthClient, AuthError, TMDBClient
from streamBox.core.models import (
    Movie,
    MovieDetailsView,
    ProfileSummary,
    RatedMovie,
    User,
)
from streamBox.storage import auth_storage, favorites_storage, ratings_storage
from streamBox.utils import log_debug, parse_iso
from streamBox.validation import (
    ValidationError,
    validate_login,
    validate_profile,
    validate_registration,
)

# (done, total, label) – label is the title just loaded
ProgressFn = Callable[[int, int, str], None]

SORT_CHOICES = ("recent", "highRated", "lowRated")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_tmdb: TMDBClient | None = None
_auth: AuthClient | None = None


def tmdb() -> TMDBClient:
    """Shared catalog client, created on first use."""
    global _tmdb
    if _tmdb is None:
        _tmdb = TMDBClient()
    return _tmdb


def auth() -> AuthClient:
    global _auth
    if _auth is None:
        _auth = AuthClient()
    return _auth

# ───────────────────────── session ─────────────────────────────────────────
def sign_in(username: str, password: str) -> User:
    """
    Local accounts first, then the remote auth API. The resulting session
    is saved before returning.

    Raises
    ------
    ValidationError
        Empty / too-short username or password.
    AuthError
        Remote login rejected, or the response carried no token.
    """
    validate_login(username, password)
    username = username.strip()

    local_user = auth_storage.login_with_credentials(username, password)
    if local_user:
        auth_storage.save_user(local_user)
        log_debug(f"Signed in local account '{username}'")
        return local_user

    payload = auth().login(username, password)
    token = payload.get("accessToken") or payload.get("token")
    if not token:
        raise AuthError("Missing token")

    user = User.from_record(payload)
    user.token = token
    auth_storage.save_user(user)
    log_debug(f"Signed in remote account '{username}'")
    return user


def sign_up(username: str, email: str, password: str, confirm: str) -> User:
    validate_registration(username, email, password, confirm)
    user = auth_storage.register_user(username.strip(), email.strip(), password)
    auth_storage.save_user(user)
    return user


def sign_out() -> None:
    auth_storage.logout_user()


def is_signed_in() -> bool:
    return auth_storage.get_token() is not None


def current_user() -> Optional[User]:
    return auth_storage.get_user()


def update_profile(
    first_name: str,
    last_name: str,
    email: str,
    username: str | None = None,
) -> User:
    """Validate and save profile edits on the current session."""
    validate_profile(first_name, last_name, email)
    if username is not None and not username.strip():
        raise ValidationError("Username is required")
    return auth_storage.update_user(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email.strip(),
        username=username.strip() if username is not None else None,
    )


def profile_summary() -> ProfileSummary:
    return ProfileSummary(
        user=auth_storage.get_user(),
        favorites_count=len(favorites_storage.get_favorites()),
        ratings_count=len(ratings_storage.get_all_ratings()),
    )

# ───────────────────────── browsing ────────────────────────────────────────
def load_home() -> Tuple[Optional[User], List[Movie]]:
    """Signed-in user and this week's trending movies."""
    return auth_storage.get_user(), tmdb().get_trending_movies()


def load_movies(page: int = 1) -> Tuple[List[Movie], List[Movie]]:
    """(all movies, trending movies) for the catalog listing."""
    client = tmdb()
    return client.get_all_movies(page), client.get_trending_movies()


def filter_movies(
    movies: List[Movie],
    query: str = "",
    genre_id: int | None = None,
    language: str | None = None,
) -> List[Movie]:
    """
    Narrow *movies* by original language, genre id and a free-text query.

    The query matches title, genre names and cast names, case-insensitively.
    """
    result = list(movies)
    if language:
        result = [m for m in result if m.original_language == language]
    if genre_id is not None:
        result = [m for m in result if genre_id in m.genre_ids]
    q = query.strip().lower()
    if q:
        result = [
            m for m in result
            if q in m.title.lower()
            or any(q in g.name.lower() for g in m.genres)
            or any(q in c.name.lower() for c in m.cast)
        ]
    return result


def movie_details(movie_id: int) -> MovieDetailsView:
    """The movie plus whether it's a favorite and the user's own rating."""
    movie = tmdb().get_movie_by_id(movie_id)
    return MovieDetailsView(
        movie=movie,
        is_favorite=favorites_storage.is_favorite(movie.id),
        user_rating=ratings_storage.get_movie_rating(movie.id),
    )

# ───────────────────────── favorites / ratings ─────────────────────────────
def toggle_favorite(movie_id: int) -> bool:
    return favorites_storage.toggle_favorite(movie_id)


def rate_movie(movie_id: int, rating: int) -> None:
    try:
        ratings_storage.rate_movie(movie_id, rating)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def clear_favorites() -> None:
    favorites_storage.clear_favorites()


def clear_ratings() -> None:
    ratings_storage.clear_ratings()


def _fetch_many(movie_ids: List[int], progress: ProgressFn | None) -> dict[int, Movie]:
    """Details for every id; ids that fail to load are logged and skipped."""
    client = tmdb()
    found: dict[int, Movie] = {}
    total = len(movie_ids)
    for i, mid in enumerate(movie_ids, start=1):
        label = str(mid)
        try:
            movie = client.get_movie_by_id(mid)
            found[mid] = movie
            label = movie.title
        except ApiError as exc:
            log_debug(f"Could not load movie {mid}: {exc}")
        if progress:
            progress(i, total, label)
    return found


def load_favorites(progress: ProgressFn | None = None) -> List[Movie]:
    """Details for each favorite, oldest favorite first."""
    ids = favorites_storage.get_favorites()
    if not ids:
        return []
    found = _fetch_many(ids, progress)
    return [found[mid] for mid in ids if mid in found]


def sort_rated(rated: List[RatedMovie], sort_by: str = "recent") -> List[RatedMovie]:
    if sort_by not in SORT_CHOICES:
        raise ValidationError(f"sort_by must be one of {', '.join(SORT_CHOICES)}")
    if sort_by == "highRated":
        return sorted(rated, key=lambda r: r.rating.rating, reverse=True)
    if sort_by == "lowRated":
        return sorted(rated, key=lambda r: r.rating.rating)
    return sorted(rated, key=lambda r: _rated_at(r.rating.rated_at), reverse=True)


def _rated_at(stamp: str) -> datetime:
    try:
        return parse_iso(stamp)
    except (TypeError, AttributeError, ValueError):
        # unreadable stamps sort as oldest
        return _EPOCH


def search_rated(rated: List[RatedMovie], query: str) -> List[RatedMovie]:
    q = query.strip().lower()
    if not q:
        return list(rated)
    return [
        r for r in rated
        if q in r.movie.title.lower() or any(q in g.name.lower() for g in r.movie.genres)
    ]


def load_rated_movies(
    query: str = "",
    sort_by: str = "recent",
    progress: ProgressFn | None = None,
) -> List[RatedMovie]:
    """
    Every rated movie with its rating, filtered by *query* (title or genre)
    and ordered by *sort_by*.

    Parameters
    ----------
    sort_by
        ``recent`` (newest rating first), ``highRated`` or ``lowRated``.
    """
    if sort_by not in SORT_CHOICES:
        raise ValidationError(f"sort_by must be one of {', '.join(SORT_CHOICES)}")
    ratings = ratings_storage.get_all_ratings()
    if not ratings:
        return []
    found = _fetch_many([r.movie_id for r in ratings], progress)
    rated = [RatedMovie(found[r.movie_id], r) for r in ratings if r.movie_id in found]
    return sort_rated(search_rated(rated, query), sort_by)
