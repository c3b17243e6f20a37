"""
Configuration Management

Loads environment variables and provides settings for the movie sync pipeline.
Uses python-dotenv for local development and environment variables for production.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()


MOVIE_HEADERS: Tuple[str, ...] = (
    "ID",
    "Title",
    "release_date",
    "poster",
    "genre",
    "runtime",
    "favorite",
    "overview",
    "backdrop",
    "rating",
)

MOVIE_HEADER_MAP: Dict[str, str] = {
    "ID": "id",
    "Title": "title",
    "release_date": "release_date",
    "poster": "poster_path",
    "genre": "genre",
    "runtime": "runtime",
    "favorite": "favorite",
    "overview": "overview",
    "backdrop": "backdrop_path",
    "rating": "score",
}

# TMDb images at full resolution
TMDB_BASE_URL = "https://image.tmdb.org/t/p/original"


@dataclass(frozen=True)
class SheetLayout:
    """
    Fixed shape of the movie sheet.

    Built once at startup and handed to the transformer, so the mapping
    rules never live in module state the mapper reaches for.
    """

    headers: Tuple[str, ...] = MOVIE_HEADERS
    mapping: Dict[str, str] = field(default_factory=lambda: dict(MOVIE_HEADER_MAP))
    image_base_url: str = TMDB_BASE_URL
    url_fields: FrozenSet[str] = frozenset({"poster_path", "backdrop_path"})

    def field_name(self, header: str) -> str:
        """Internal field name for an external column name."""
        return self.mapping.get(header, header)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.field_name(header) for header in self.headers)


class Settings:
    """
    Application settings loaded from environment variables.

    Ensures no hardcoded credentials in code.
    """

    def __init__(self):
        """Read the environment and validate required settings."""
        # Google Sheets Configuration
        self.GOOGLE_SHEET_ID: Optional[str] = os.getenv("GOOGLE_SHEET_ID")
        self.GOOGLE_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
        self.GOOGLE_CREDENTIALS_PATH: Optional[str] = os.getenv("GOOGLE_CREDENTIALS_PATH")

        # Output Configuration
        self.OUTPUT_FILE: str = os.getenv(
            "OUTPUT_FILE", os.path.join("src", "content", "movies.json")
        )

        # Logging Configuration
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE: str = os.getenv("LOG_FILE", "logs/etl.log")

        self._validate_settings()

    def _validate_settings(self) -> None:
        """
        Validate that all required settings are provided.

        Raises:
            ValueError: If required settings are missing
        """
        missing_fields = []

        if not self.GOOGLE_SHEET_ID:
            missing_fields.append("GOOGLE_SHEET_ID")

        # A service account file can stand in for the API key
        if not self.GOOGLE_API_KEY and not self.GOOGLE_CREDENTIALS_PATH:
            missing_fields.append("GOOGLE_API_KEY")

        if missing_fields:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_fields)}. "
                f"Please check your .env file."
            )

    def __repr__(self) -> str:
        """Return string representation (excluding sensitive data)."""
        return (
            f"Settings("
            f"GOOGLE_SHEET_ID={self.GOOGLE_SHEET_ID}, "
            f"OUTPUT_FILE={self.OUTPUT_FILE}, "
            f"LOG_LEVEL={self.LOG_LEVEL}"
            f")"
        )
