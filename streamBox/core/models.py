# Movie / session dataclasses (+ any simple DTOs)
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from streamBox.settings import YOUTUBE_WATCH_URL


@dataclass(slots=True)
class Genre:
    id: int
    name: str


@dataclass(slots=True)
class CastMember:
    id: int
    name: str
    character: str | None = None
    profile_path: str | None = None


@dataclass(slots=True)
class Video:
    key: str
    name: str | None = None
    site: str | None = None
    type: str | None = None

    @property
    def url(self) -> str | None:
        if self.site == "YouTube":
            return YOUTUBE_WATCH_URL.format(key=self.key)
        return None


@dataclass(slots=True)
class Movie:
    id: int
    title: str
    overview: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    release_date: str = ""
    vote_average: float = 0
    vote_count: int = 0
    popularity: float = 0
    genre_ids: List[int] = field(default_factory=list)
    original_language: str = "en"
    adult: bool = False
    # detail-only fields
    runtime: int | None = None
    budget: int | None = None
    revenue: int | None = None
    genres: List[Genre] = field(default_factory=list)
    production_companies: List[Dict[str, Any]] = field(default_factory=list)
    cast: List[CastMember] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)

    @property
    def release_year(self) -> Optional[int]:
        try:
            return int(self.release_date[:4])
        except ValueError:
            return None

    @property
    def trailer_url(self) -> Optional[str]:
        """First YouTube trailer, if the details call returned one."""
        return next(
            (v.url for v in self.videos if v.site == "YouTube" and v.type == "Trailer"),
            None,
        )


@dataclass(slots=True)
class MoviePage:
    page: int
    results: List[Movie]
    total_pages: int
    total_results: int


@dataclass(slots=True)
class User:
    id: int
    username: str
    email: str
    first_name: str = ""
    last_name: str = ""
    gender: str = "male"
    image: str = ""
    token: str = ""
    refresh_token: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.username

    def to_record(self) -> Dict[str, Any]:
        """camelCase dict as stored on disk / returned by the auth API."""
        rec = {
            "id":        self.id,
            "username":  self.username,
            "email":     self.email,
            "firstName": self.first_name,
            "lastName":  self.last_name,
            "gender":    self.gender,
            "image":     self.image,
            "token":     self.token,
        }
        if self.refresh_token:
            rec["refreshToken"] = self.refresh_token
        return rec

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "User":
        return cls(
            id=int(rec.get("id") or 0),
            username=rec.get("username", ""),
            email=rec.get("email", ""),
            first_name=rec.get("firstName") or "",
            last_name=rec.get("lastName") or "",
            gender=rec.get("gender") or "male",
            image=rec.get("image") or "",
            token=rec.get("token") or rec.get("accessToken") or "",
            refresh_token=rec.get("refreshToken"),
        )


@dataclass(slots=True)
class FavoriteMovie:
    movie_id: int
    added_at: str

    def to_record(self) -> Dict[str, Any]:
        return {"movieId": self.movie_id, "addedAt": self.added_at}

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "FavoriteMovie":
        return cls(movie_id=int(rec["movieId"]), added_at=str(rec.get("addedAt") or ""))


@dataclass(slots=True)
class MovieRating:
    movie_id: int
    rating: int
    rated_at: str

    def to_record(self) -> Dict[str, Any]:
        return {"movieId": self.movie_id, "rating": self.rating, "ratedAt": self.rated_at}

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "MovieRating":
        return cls(
            movie_id=int(rec["movieId"]),
            rating=int(rec["rating"]),
            rated_at=str(rec.get("ratedAt") or ""),
        )


@dataclass(slots=True)
class RatedMovie:
    movie: Movie
    rating: MovieRating


@dataclass(slots=True)
class MovieDetailsView:
    movie: Movie
    is_favorite: bool
    user_rating: int | None


@dataclass(slots=True)
class ProfileSummary:
    user: User | None
    favorites_count: int
    ratings_count: int
