"""Tests for movie_etl/load.py"""

import dataclasses
import json
import os
import stat
from unittest.mock import patch

import pytest

from movie_etl.load import MovieJsonWriter, write_movies
from movie_etl.transform import map_row


@pytest.fixture
def movies(inception_row, layout):
    second = list(inception_row)
    second[0], second[1], second[3] = "2", "Amélie", ""
    return [map_row(inception_row, layout), map_row(second, layout)]


class TestMovieJsonWriter:
    def test_creates_missing_directories(self, tmp_path, movies):
        output_file = tmp_path / "src" / "content" / "movies.json"
        assert not output_file.parent.exists()
        write_movies(movies, str(output_file))
        assert output_file.is_file()

    def test_returns_count(self, tmp_path, movies):
        assert write_movies(movies, str(tmp_path / "movies.json")) == 2

    def test_json_array_of_records(self, tmp_path, movies, inception_record):
        output_file = tmp_path / "movies.json"
        write_movies(movies, str(output_file))
        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert isinstance(data, list)
        assert data[0] == inception_record
        assert data[1]["poster_path"] == ""

    def test_two_space_indent_and_key_order(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        write_movies(movies, str(output_file))
        text = output_file.read_text(encoding="utf-8")
        assert text.startswith('[\n  {\n    "id": "1",\n    "title": "Inception",')
        assert not text.endswith("\n")

    def test_urls_not_escaped(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        write_movies(movies, str(output_file))
        assert "https://image.tmdb.org/t/p/original/abc.jpg" in output_file.read_text(encoding="utf-8")

    def test_non_ascii_kept_as_utf8(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        write_movies(movies, str(output_file))
        assert '"title": "Amélie"' in output_file.read_bytes().decode("utf-8")

    def test_replaces_existing_file(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        output_file.write_text('[{"id": "old"}, {"id": "older"}, {"id": "oldest"}]', encoding="utf-8")
        write_movies(movies[:1], str(output_file))
        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert [movie["id"] for movie in data] == ["1"]

    def test_empty_collection(self, tmp_path):
        output_file = tmp_path / "movies.json"
        write_movies([], str(output_file))
        assert output_file.read_text(encoding="utf-8") == "[]"

    def test_same_input_same_bytes(self, tmp_path, movies):
        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        write_movies(movies, str(first))
        write_movies(movies, str(second))
        assert first.read_bytes() == second.read_bytes()

    def test_no_temp_files_left(self, tmp_path, movies):
        write_movies(movies, str(tmp_path / "movies.json"))
        assert os.listdir(tmp_path) == ["movies.json"]

    def test_failed_replace_keeps_old_file(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        output_file.write_text("[]", encoding="utf-8")
        with patch("movie_etl.load.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                MovieJsonWriter().write(movies, str(output_file))
        assert output_file.read_text(encoding="utf-8") == "[]"
        assert os.listdir(tmp_path) == ["movies.json"]

    def test_unwritable_destination(self, tmp_path, movies):
        blocker = tmp_path / "content"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(OSError):
            write_movies(movies, str(blocker / "movies.json"))

    def test_lone_surrogate_escaped(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        broken = dataclasses.replace(movies[0], title="bad \ud800 title")
        write_movies([broken], str(output_file))
        text = output_file.read_text(encoding="utf-8")
        assert '"title": "bad \\ud800 title"' in text
        assert json.loads(text)[0]["title"] == "bad \ud800 title"
        assert os.listdir(tmp_path) == ["movies.json"]

    def test_any_write_error_removes_temp_file(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        output_file.write_text("[]", encoding="utf-8")
        with patch("movie_etl.load.os.chmod", side_effect=RuntimeError("interrupted")):
            with pytest.raises(RuntimeError):
                write_movies(movies, str(output_file))
        assert output_file.read_text(encoding="utf-8") == "[]"
        assert os.listdir(tmp_path) == ["movies.json"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
class TestFileMode:
    def test_new_file_follows_umask(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        previous = os.umask(0o077)
        try:
            write_movies(movies, str(output_file))
        finally:
            os.umask(previous)
        assert stat.S_IMODE(output_file.stat().st_mode) == 0o600

    def test_new_file_default_umask(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        previous = os.umask(0o022)
        try:
            write_movies(movies, str(output_file))
        finally:
            os.umask(previous)
        assert stat.S_IMODE(output_file.stat().st_mode) == 0o644

    def test_existing_file_keeps_mode(self, tmp_path, movies):
        output_file = tmp_path / "movies.json"
        output_file.write_text("[]", encoding="utf-8")
        output_file.chmod(0o640)
        write_movies(movies, str(output_file))
        assert stat.S_IMODE(output_file.stat().st_mode) == 0o640
