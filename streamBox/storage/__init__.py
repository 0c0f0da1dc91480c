"""
storage
~~~~~~~
On-device persistence: a SQLite key-value store plus the three record
stores built on it (session, favorites, ratings).
"""

from streamBox.storage.errors            import StorageError
from streamBox.storage.auth_storage      import AuthStorage, auth_storage
from streamBox.storage.favorites_storage import FavoritesStorage, favorites_storage
from streamBox.storage.ratings_storage   import RatingsStorage, ratings_storage

__all__ = [
    "StorageError",
    "AuthStorage", "auth_storage",
    "FavoritesStorage", "favorites_storage",
    "RatingsStorage", "ratings_storage",
]
