"""storage.favorites_storage
Ordered set of favorite movie ids, each stamped with when it was added.
"""

from __future__ import annotations

import sqlite3
from typing import List

from streamBox.core.models import FavoriteMovie
from streamBox.settings import FAVORITES_KEY
from streamBox.storage import kv_db
from streamBox.storage.errors import StorageError
from streamBox.storage.records import load_list, load_list_or_empty, save_list
from streamBox.utils import log_debug, utc_now_iso


class FavoritesStorage:

    @staticmethod
    def get_favorite_records() -> List[FavoriteMovie]:
        out: List[FavoriteMovie] = []
        for rec in load_list_or_empty(FAVORITES_KEY):
            try:
                out.append(FavoriteMovie.from_record(rec))
            except (KeyError, TypeError, ValueError) as exc:
                log_debug(f"Skipping bad favorite record {rec!r}: {exc}")
        return out

    @staticmethod
    def get_favorites() -> List[int]:
        """All favorite movie ids, oldest first."""
        return [f.movie_id for f in FavoritesStorage.get_favorite_records()]

    @staticmethod
    def add_favorite(movie_id: int) -> bool:
        """Add *movie_id*; **False** if it was already a favorite."""
        try:
            favorites = load_list(FAVORITES_KEY)
            if any(f.get("movieId") == movie_id for f in favorites):
                return False
            favorites.append(FavoriteMovie(movie_id, utc_now_iso()).to_record())
            save_list(FAVORITES_KEY, favorites)
            return True
        except (sqlite3.Error, ValueError) as exc:
            log_debug(f"Error adding favorite: {exc}")
            raise StorageError("Failed to add favorite") from exc

    @staticmethod
    def remove_favorite(movie_id: int) -> bool:
        """Remove *movie_id*; **False** if it wasn't a favorite."""
        try:
            favorites = load_list(FAVORITES_KEY)
            if not favorites:
                return False
            kept = [f for f in favorites if f.get("movieId") != movie_id]
            if len(kept) == len(favorites):
                return False
            save_list(FAVORITES_KEY, kept)
            return True
        except (sqlite3.Error, ValueError) as exc:
            log_debug(f"Error removing favorite: {exc}")
            raise StorageError("Failed to remove favorite") from exc

    @staticmethod
    def is_favorite(movie_id: int) -> bool:
        return movie_id in FavoritesStorage.get_favorites()

    @staticmethod
    def toggle_favorite(movie_id: int) -> bool:
        """Flip favorite status and return the new one."""
        if FavoritesStorage.is_favorite(movie_id):
            FavoritesStorage.remove_favorite(movie_id)
            return False
        FavoritesStorage.add_favorite(movie_id)
        return True

    @staticmethod
    def clear_favorites() -> None:
        try:
            kv_db.remove_item(FAVORITES_KEY)
        except sqlite3.Error as exc:
            log_debug(f"Error clearing favorites: {exc}")
            raise StorageError("Failed to clear favorites") from exc


favorites_storage = FavoritesStorage()
