"""storage.ratings_storage
One 1–5 star rating per movie id; re-rating replaces the old entry.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from streamBox.core.models import MovieRating
from streamBox.settings import MAX_RATING, MIN_RATING, RATINGS_KEY
from streamBox.storage import kv_db
from streamBox.storage.errors import StorageError
from streamBox.storage.records import load_list, load_list_or_empty, save_list
from streamBox.utils import log_debug, utc_now_iso


def _check_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValueError(f"Rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


class RatingsStorage:

    @staticmethod
    def get_all_ratings() -> List[MovieRating]:
        out: List[MovieRating] = []
        for rec in load_list_or_empty(RATINGS_KEY):
            try:
                out.append(MovieRating.from_record(rec))
            except (KeyError, TypeError, ValueError) as exc:
                log_debug(f"Skipping bad rating record {rec!r}: {exc}")
        return out

    @staticmethod
    def get_movie_rating(movie_id: int) -> Optional[int]:
        """Return the user's stars for *movie_id* or **None**."""
        return next(
            (r.rating for r in RatingsStorage.get_all_ratings() if r.movie_id == movie_id),
            None,
        )

    @staticmethod
    def rate_movie(movie_id: int, rating: int) -> None:
        """Insert or replace the rating for *movie_id*.

        An existing entry keeps its position in the list; only its score and
        timestamp change.
        """
        _check_rating(rating)
        new = MovieRating(movie_id, rating, utc_now_iso()).to_record()
        try:
            ratings = load_list(RATINGS_KEY)
            idx = next((i for i, r in enumerate(ratings) if r.get("movieId") == movie_id), None)
            if idx is None:
                ratings.append(new)
            else:
                ratings[idx] = new
            save_list(RATINGS_KEY, ratings)
        except (sqlite3.Error, ValueError) as exc:
            log_debug(f"Error rating movie: {exc}")
            raise StorageError("Failed to rate movie") from exc

    @staticmethod
    def remove_rating(movie_id: int) -> None:
        try:
            ratings = load_list(RATINGS_KEY)
            save_list(RATINGS_KEY, [r for r in ratings if r.get("movieId") != movie_id])
        except (sqlite3.Error, ValueError) as exc:
            log_debug(f"Error removing rating: {exc}")
            raise StorageError("Failed to remove rating") from exc

    @staticmethod
    def clear_ratings() -> None:
        try:
            kv_db.remove_item(RATINGS_KEY)
        except sqlite3.Error as exc:
            log_debug(f"Error clearing ratings: {exc}")
            raise StorageError("Failed to clear ratings") from exc


ratings_storage = RatingsStorage()
