from unittest.mock import MagicMock

import pytest

from config import Config
from main import MovieSearchApp
from models import MovieDetail, MovieSummary
from services import MovieSearchService

MATRIX = MovieSummary(imdb_id="tt0133093", title="The Matrix", year="1999",
                      poster="https://m.media-amazon.com/images/M/matrix.jpg")
RELOADED = MovieSummary(imdb_id="tt0234215", title="The Matrix Reloaded", year="2003", poster="N/A")

MATRIX_DETAIL = MovieDetail(
    imdb_id="tt0133093",
    title="The Matrix",
    year="1999",
    rated="R",
    runtime="136 min",
    genre="Action, Sci-Fi",
    director="Lana Wachowski, Lilly Wachowski",
    actors="Keanu Reeves, Laurence Fishburne, Carrie-Anne Moss",
    plot="A computer hacker learns about the true nature of reality.",
    poster="https://m.media-amazon.com/images/M/matrix.jpg",
    imdb_rating="8.7",
)


@pytest.fixture
def summaries():
    return [MATRIX, RELOADED]


@pytest.fixture
def detail():
    return MATRIX_DETAIL


@pytest.fixture
def service(summaries, detail):
    svc = MagicMock(spec=MovieSearchService)
    svc.search.return_value = summaries
    svc.get_details.return_value = detail
    return svc


@pytest.fixture
def app(service):
    return MovieSearchApp(service, Config(OMDB_API_KEY="test-key"))
