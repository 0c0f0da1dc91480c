"""
streamBox
~~~~~~~~~

Top-level package for the StreamBox movie browser.

Exports:
  - Domain dataclasses: Movie, User, FavoriteMovie, MovieRating
  - Local stores: auth_storage, favorites_storage, ratings_storage
  - Catalog / auth clients: TMDBClient, AuthClient
  - Screen-level actions live in `streamBox.controller`
"""

# core
from streamBox.core.models import FavoriteMovie, Movie, MovieRating, User

# storage
from streamBox.storage import (
    StorageError,
    auth_storage,
    favorites_storage,
    ratings_storage,
)

# api clients
from streamBox.api_clients import ApiError, AuthClient, AuthError, TMDBClient

__all__ = [
    # core
    "FavoriteMovie",
    "Movie",
    "MovieRating",
    "User",
    # storage
    "StorageError",
    "auth_storage",
    "favorites_storage",
    "ratings_storage",
    # api clients
    "ApiError",
    "AuthClient",
    "AuthError",
    "TMDBClient",
]
