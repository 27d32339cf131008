from unittest.mock import MagicMock

import pytest
import requests

from models import MovieDetail, MovieSummary
from services import MovieSearchService, OmdbError

OMDB_URL = "https://www.omdbapi.com/"

SEARCH_PAYLOAD = {
    "Search": [
        {"Title": "The Matrix", "Year": "1999", "imdbID": "tt0133093", "Type": "movie",
         "Poster": "https://m.media-amazon.com/images/M/matrix.jpg"},
        {"Title": "The Matrix Reloaded", "Year": "2003", "imdbID": "tt0234215", "Type": "movie",
         "Poster": "N/A"},
    ],
    "totalResults": "2",
    "Response": "True",
}

DETAIL_PAYLOAD = {
    "Title": "The Matrix", "Year": "1999", "Rated": "R", "Released": "31 Mar 1999",
    "Runtime": "136 min", "Genre": "Action, Sci-Fi", "Director": "Lana Wachowski, Lilly Wachowski",
    "Actors": "Keanu Reeves, Laurence Fishburne, Carrie-Anne Moss",
    "Plot": "A computer hacker learns about the true nature of reality.",
    "Poster": "https://m.media-amazon.com/images/M/matrix.jpg",
    "imdbRating": "8.7", "imdbID": "tt0133093", "Type": "movie", "Response": "True",
}


def make_service(payload=None, status=200, json_error=None, http_error=None):
    response = MagicMock()
    response.status_code = status
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    if http_error is not None:
        response.raise_for_status.side_effect = http_error
    session = MagicMock()
    session.get.return_value = response
    return MovieSearchService("secret", OMDB_URL, timeout=5, session=session), session, response


def test_search_sends_key_and_term():
    service, session, _ = make_service(SEARCH_PAYLOAD)
    service.search("matrix")
    session.get.assert_called_once_with(OMDB_URL, params={"apikey": "secret", "s": "matrix"}, timeout=5)


def test_search_parses_summaries():
    service, _, _ = make_service(SEARCH_PAYLOAD)
    results = service.search("matrix")
    assert [r.imdb_id for r in results] == ["tt0133093", "tt0234215"]
    assert results[0] == MovieSummary(imdb_id="tt0133093", title="The Matrix", year="1999",
                                      poster="https://m.media-amazon.com/images/M/matrix.jpg", type="movie")
    assert results[0].has_poster
    assert not results[1].has_poster


def test_search_drops_repeated_ids():
    payload = dict(SEARCH_PAYLOAD, Search=SEARCH_PAYLOAD["Search"] + [SEARCH_PAYLOAD["Search"][0]])
    service, _, _ = make_service(payload)
    assert len(service.search("matrix")) == 2


def test_search_failure_flag_raises_with_api_text():
    service, _, _ = make_service({"Response": "False", "Error": "Movie not found!"})
    with pytest.raises(OmdbError) as excinfo:
        service.search("qwertyuiop")
    assert excinfo.value.message == "Movie not found!"


def test_rejected_key_is_an_api_error_not_a_transport_error():
    service, _, response = make_service(
        {"Response": "False", "Error": "Invalid API key!"}, status=401,
        http_error=requests.HTTPError("401 Client Error"))
    with pytest.raises(OmdbError, match="Invalid API key!"):
        service.search("matrix")
    response.raise_for_status.assert_not_called()


def test_non_json_error_page_raises_http_error():
    service, _, _ = make_service(
        status=503,
        json_error=requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0),
        http_error=requests.HTTPError("503 Server Error"))
    with pytest.raises(requests.HTTPError):
        service.search("matrix")


def test_non_json_success_is_a_request_exception():
    service, _, _ = make_service(json_error=requests.exceptions.JSONDecodeError("Expecting value", "oops", 0))
    with pytest.raises(requests.RequestException):
        service.search("matrix")


def test_connection_error_propagates():
    service, session, _ = make_service(SEARCH_PAYLOAD)
    session.get.side_effect = requests.ConnectionError("network down")
    with pytest.raises(requests.ConnectionError):
        service.search("matrix")


def test_malformed_search_item_is_a_request_exception():
    service, _, _ = make_service({"Response": "True", "Search": [{"Title": "No id"}]})
    with pytest.raises(requests.RequestException):
        service.search("matrix")


def test_get_details_sends_id_and_parses_record():
    service, session, _ = make_service(DETAIL_PAYLOAD)
    movie = service.get_details("tt0133093")
    session.get.assert_called_once_with(OMDB_URL, params={"apikey": "secret", "i": "tt0133093"}, timeout=5)
    assert isinstance(movie, MovieDetail)
    assert movie.director == "Lana Wachowski, Lilly Wachowski"
    assert movie.imdb_rating == "8.7"
    assert movie.link == "https://www.imdb.com/title/tt0133093/"


def test_get_details_failure_flag_raises():
    service, _, _ = make_service({"Response": "False", "Error": "Incorrect IMDb ID."})
    with pytest.raises(OmdbError, match="Incorrect IMDb ID."):
        service.get_details("tt0000000")


def test_missing_error_text_gets_a_fallback():
    service, _, _ = make_service({"Response": "False"})
    with pytest.raises(OmdbError, match="Unknown error."):
        service.get_details("tt0000000")
