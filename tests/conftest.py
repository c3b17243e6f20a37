"""Shared test fixtures."""

import logging

import pandas as pd
import pytest

from config.settings import MOVIE_HEADERS, SheetLayout

INCEPTION_ROW = [
    "1",
    "Inception",
    "2010-07-16",
    "/abc.jpg",
    "Sci-Fi",
    "148",
    "true",
    "A thief...",
    "/xyz.jpg",
    "8.8",
]

INCEPTION_RECORD = {
    "id": "1",
    "title": "Inception",
    "release_date": "2010-07-16",
    "poster_path": "https://image.tmdb.org/t/p/original/abc.jpg",
    "genre": "Sci-Fi",
    "runtime": "148",
    "favorite": "true",
    "overview": "A thief...",
    "backdrop_path": "https://image.tmdb.org/t/p/original/xyz.jpg",
    "score": "8.8",
}

ARRIVAL_ROW = [
    "2",
    "Arrival",
    "2016-11-11",
    "",
    "Drama",
    "116",
    "false",
    "Linguist meets heptapods.",
    "/arr.jpg",
    "7.9",
]


@pytest.fixture
def layout():
    """Standard movie sheet layout."""
    return SheetLayout()


@pytest.fixture
def inception_row():
    return list(INCEPTION_ROW)


@pytest.fixture
def inception_record():
    return dict(INCEPTION_RECORD)


@pytest.fixture
def sheet_values():
    """Values as returned by Worksheet.get_all_values(): header row first."""
    return [list(MOVIE_HEADERS), list(INCEPTION_ROW), list(ARRIVAL_ROW)]


@pytest.fixture
def movies_df(sheet_values):
    """DataFrame shaped the way the extractor returns it."""
    return pd.DataFrame(sheet_values[1:], columns=sheet_values[0], dtype=object)


@pytest.fixture
def sheet_env(monkeypatch, tmp_path):
    """Environment for a valid Settings object writing under tmp_path."""
    output_file = tmp_path / "src" / "content" / "movies.json"
    monkeypatch.setenv("GOOGLE_SHEET_ID", "sheet-123")
    monkeypatch.setenv("GOOGLE_API_KEY", "key-abc")
    monkeypatch.delenv("GOOGLE_CREDENTIALS_PATH", raising=False)
    monkeypatch.setenv("OUTPUT_FILE", str(output_file))
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "etl.log"))
    return output_file


@pytest.fixture
def restore_root_logger(monkeypatch, tmp_path):
    """Undo handler changes made by setup_logging(); relative log paths land in tmp_path."""
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
