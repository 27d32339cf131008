# services.py
import logging
from typing import List, Optional

import requests

from models import NOT_AVAILABLE, MovieDetail, MovieSummary

logger = logging.getLogger("movie-search.services")


class OmdbError(Exception):
    """A well-formed OMDb response with Response == "False"."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MovieSearchService:
    """A service to handle interactions with the OMDb API.

    Transport problems (connection errors, HTTP errors without an OMDb
    body, bodies that are not JSON) propagate as requests.RequestException.
    """
    def __init__(self, api_key: Optional[str], base_url: str, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, query: str) -> List[MovieSummary]:
        """Looks up titles matching a free-text query."""
        data = self._get(s=query)
        try:
            # OMDb occasionally repeats a title within one page
            unique_results: dict[str, MovieSummary] = {}
            for item in data.get("Search", []):
                parsed = self._parse_summary(item)
                unique_results.setdefault(parsed.imdb_id, parsed)
            return list(unique_results.values())
        except (KeyError, TypeError, AttributeError) as e:
            raise requests.exceptions.InvalidJSONError(f"Malformed search payload: {e}") from e

    def get_details(self, imdb_id: str) -> MovieDetail:
        """Fetches the full record for one IMDb id."""
        data = self._get(i=imdb_id)
        try:
            return self._parse_detail(data)
        except KeyError as e:
            raise requests.exceptions.InvalidJSONError(f"Malformed detail payload: {e}") from e

    def _get(self, **params) -> dict:
        logger.debug("GET %s %s", self.base_url, params)
        resp = self.session.get(self.base_url, params={"apikey": self.api_key, **params}, timeout=self.timeout)
        try:
            data = resp.json()
        except requests.exceptions.JSONDecodeError:
            resp.raise_for_status()
            raise

        # OMDb reports its own failures (bad key included) in the body, whatever the status
        if isinstance(data, dict) and data.get("Response") == "False":
            message = data.get("Error") or "Unknown error."
            logger.warning("OMDb error for %s: %s", params, message)
            raise OmdbError(message)
        resp.raise_for_status()
        if not isinstance(data, dict):
            raise requests.exceptions.InvalidJSONError(f"Unexpected payload: {data!r}", response=resp)
        return data

    @staticmethod
    def _parse_summary(item: dict) -> MovieSummary:
        """Parses a single raw search item into our MovieSummary data model."""
        return MovieSummary(
            imdb_id=item["imdbID"],
            title=item.get("Title", NOT_AVAILABLE),
            year=item.get("Year", NOT_AVAILABLE),
            poster=item.get("Poster") or NOT_AVAILABLE,
            type=item.get("Type", "movie"),
        )

    @staticmethod
    def _parse_detail(data: dict) -> MovieDetail:
        return MovieDetail(
            imdb_id=data["imdbID"],
            title=data.get("Title", NOT_AVAILABLE),
            year=data.get("Year", NOT_AVAILABLE),
            rated=data.get("Rated", NOT_AVAILABLE),
            runtime=data.get("Runtime", NOT_AVAILABLE),
            genre=data.get("Genre", NOT_AVAILABLE),
            director=data.get("Director", NOT_AVAILABLE),
            actors=data.get("Actors", NOT_AVAILABLE),
            plot=data.get("Plot", NOT_AVAILABLE),
            poster=data.get("Poster") or NOT_AVAILABLE,
            imdb_rating=data.get("imdbRating", NOT_AVAILABLE),
        )
