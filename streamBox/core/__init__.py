"""
core
~~~~
Domain layer – pure dataclasses shared by the stores, clients and CLI.
"""

from .models import (
    CastMember,
    FavoriteMovie,
    Genre,
    Movie,
    MovieDetailsView,
    MoviePage,
    MovieRating,
    ProfileSummary,
    RatedMovie,
    User,
    Video,
)

__all__ = [
    "CastMember", "FavoriteMovie", "Genre", "Movie", "MovieDetailsView",
    "MoviePage", "MovieRating", "ProfileSummary", "RatedMovie", "User", "Video",
]
