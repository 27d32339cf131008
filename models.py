# models.py
from dataclasses import dataclass, field
from typing import List, Optional

NOT_AVAILABLE = "N/A"
IMDB_TITLE_URL = "https://www.imdb.com/title/{imdb_id}/"

@dataclass(frozen=True)
class MovieSummary:
    """One entry of an OMDb search listing."""
    imdb_id: str
    title: str
    year: str
    poster: str = NOT_AVAILABLE
    type: str = "movie"

    @property
    def has_poster(self) -> bool:
        return bool(self.poster) and self.poster != NOT_AVAILABLE


@dataclass(frozen=True)
class MovieDetail:
    """The full OMDb record for a single title."""
    imdb_id: str
    title: str
    year: str
    rated: str
    runtime: str
    genre: str
    director: str
    actors: str
    plot: str
    poster: str = NOT_AVAILABLE
    imdb_rating: str = NOT_AVAILABLE

    @property
    def has_poster(self) -> bool:
        return bool(self.poster) and self.poster != NOT_AVAILABLE

    @property
    def has_rating(self) -> bool:
        return bool(self.imdb_rating) and self.imdb_rating != NOT_AVAILABLE

    @property
    def link(self) -> str:
        return IMDB_TITLE_URL.format(imdb_id=self.imdb_id)


@dataclass(frozen=True)
class AppState:
    """A single object to hold the entire application state."""
    query: str = ""
    results: List[MovieSummary] = field(default_factory=list)
    selected_movie: Optional[MovieDetail] = None
    error: str = ""
    is_loading: bool = False
    has_searched: bool = False
