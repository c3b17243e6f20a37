"""
Data Loading into the Static Content Folder

Writes the movie collection as a pretty-printed JSON array.
The previous file is replaced in one step, never merged or truncated.
"""

import logging
import json
import os
import re
import stat
import tempfile
from typing import List

from movie_etl.models import Movie

logger = logging.getLogger(__name__)

# Decoded text holds surrogates only when they are unpaired
LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def escape_lone_surrogates(text: str) -> str:
    """
    Replace unpaired surrogates with \\uXXXX escapes.

    UTF-8 cannot encode them; the escaped form is still valid JSON and
    decodes back to the same string.
    """
    return LONE_SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", text)


class MovieJsonWriter:
    """
    Writes movie records to a JSON file.

    Output is a JSON array of objects, two-space indented, UTF-8, with keys
    in Movie field order. Same input always yields the same bytes.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def write(self, movies: List[Movie], output_file: str) -> int:
        """
        Write movie records to a JSON file, replacing any existing file.

        Args:
            movies: Movie records in sheet order
            output_file: Destination path

        Returns:
            Number of records written

        Raises:
            OSError: If the directory cannot be created or the file cannot be written
        """
        payload = escape_lone_surrogates(
            json.dumps(
                [movie.to_dict() for movie in movies],
                indent=self.indent,
                ensure_ascii=False,
            )
        )

        output_dir = os.path.dirname(output_file) or "."

        try:
            os.makedirs(output_dir, exist_ok=True)
            self._replace_file(payload, output_file, output_dir)
        except OSError as e:
            logger.error(f"Failed to write {output_file}: {e}")
            raise

        logger.info(f"Saved {len(movies)} movies to {output_file}")

        return len(movies)

    def _replace_file(self, payload: str, output_file: str, output_dir: str) -> None:
        """
        Write to a temp file beside the target, then move it into place.

        Args:
            payload: Serialized JSON text
            output_file: Destination path
            output_dir: Directory of the destination path
        """
        mode = self._target_mode(output_file)
        fd, tmp_path = tempfile.mkstemp(
            dir=output_dir, prefix=".movies-", suffix=".json.tmp"
        )
        replaced = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(payload)
            # mkstemp creates files readable by the owner only
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, output_file)
            replaced = True
            logger.debug(f"Replaced {output_file} ({len(payload)} characters)")
        finally:
            if not replaced and os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def _target_mode(output_file: str) -> int:
        """
        Permission bits for the new file.

        An existing file keeps its mode; a new one gets what open() would
        give it under the current umask.
        """
        if os.path.exists(output_file):
            return stat.S_IMODE(os.stat(output_file).st_mode)

        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_movies(movies: List[Movie], output_file: str) -> int:
    """
    Convenience function to write movies.

    Args:
        movies: Movie records in sheet order
        output_file: Destination path

    Returns:
        Number of records written
    """
    writer = MovieJsonWriter()
    return writer.write(movies, output_file)
