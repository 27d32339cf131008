# config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

@dataclass
class Config:
    """Holds all application configuration."""
    OMDB_URL: str = "https://www.omdbapi.com/"
    OMDB_API_KEY: Optional[str] = None
    REQUEST_TIMEOUT: Optional[float] = None
    LOG_FILENAME: str = "movie_search.log"
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Builds a Config from the process environment (and a .env file, if any)."""
        load_dotenv()
        timeout = os.getenv("MOVIE_SEARCH_TIMEOUT")
        return cls(
            OMDB_URL=os.getenv("OMDB_URL", cls.OMDB_URL),
            OMDB_API_KEY=os.getenv("OMDB_API_KEY"),
            REQUEST_TIMEOUT=float(timeout) if timeout else None,
            LOG_FILENAME=os.getenv("MOVIE_SEARCH_LOG_FILE", cls.LOG_FILENAME),
            LOG_LEVEL=os.getenv("MOVIE_SEARCH_LOG_LEVEL", cls.LOG_LEVEL).upper(),
        )
