"""Movie record published to the site."""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class Movie:
    """One normalized sheet row. Field order is the output key order."""
    id: str
    title: str
    release_date: str
    poster_path: str
    genre: str
    runtime: str
    favorite: str
    overview: str
    backdrop_path: str
    score: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
