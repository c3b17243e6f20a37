"""
Data Transformation Pipeline

Renames sheet columns to the site's field names and turns the poster and
backdrop paths into full TMDb image URLs.
"""

import logging
from dataclasses import fields
from typing import Any, Dict, List, Optional, Sequence, Tuple
import pandas as pd

from config.settings import SheetLayout
from movie_etl.models import Movie
from movie_etl.validator import HeaderValidator, RowShapeValidator, SchemaError

logger = logging.getLogger(__name__)


def map_row(row: Sequence[Any], layout: SheetLayout, row_number: Optional[int] = None) -> Movie:
    """
    Map one raw sheet row to a Movie.

    Cells are taken by position in ``layout.headers``. A non-empty cell in a
    URL field is prefixed with the image base URL; an empty one stays empty.

    Args:
        row: Raw cells in sheet column order
        layout: Fixed sheet layout
        row_number: 1-based data row number, used in error messages

    Returns:
        Movie record

    Raises:
        SchemaError: If the row is shorter than the header sequence
    """
    is_valid, error = RowShapeValidator(len(layout.headers)).validate(row)
    if not is_valid:
        where = f"Row {row_number}" if row_number is not None else "Row"
        raise SchemaError(f"{where}: {error}")

    values = {}
    for idx, header in enumerate(layout.headers):
        key = layout.field_name(header)
        value = str(row[idx])

        if key in layout.url_fields and value:
            value = f"{layout.image_base_url}{value}"

        values[key] = value

    return Movie(**values)


class MovieTransformer:
    """
    Transforms the raw sheet DataFrame into Movie records.

    Operations:
    - Header check against the fixed layout
    - Positional column renaming
    - TMDb image URL prefixing
    """

    def __init__(self, layout: SheetLayout):
        """
        Initialize transformer for a sheet layout.

        Raises:
            ValueError: If the layout does not produce the Movie fields
        """
        movie_fields = tuple(f.name for f in fields(Movie))
        if layout.field_names != movie_fields:
            raise ValueError(
                f"Layout fields {layout.field_names} do not match Movie fields {movie_fields}"
            )

        self.layout = layout
        self.header_validator = HeaderValidator(layout.headers)
        self.metrics = {
            "total_rows": 0,
            "mapped_rows": 0,
            "poster_urls": 0,
            "backdrop_urls": 0,
        }

    def transform(self, df: pd.DataFrame) -> Tuple[List[Movie], Dict[str, int]]:
        """
        Transform raw DataFrame into Movie records with metrics.

        Args:
            df: Raw pandas DataFrame from extraction, columns = detected header row

        Returns:
            Tuple of (movies, metrics)
            metrics dict includes: total_rows, mapped_rows, poster_urls, backdrop_urls

        Raises:
            SchemaError: If the header row or any data row has the wrong shape
        """
        self.metrics["total_rows"] = len(df)

        is_valid, error = self.header_validator.validate(list(df.columns))
        if not is_valid:
            logger.error(f"Unexpected sheet headers: {error}")
            raise SchemaError(f"Unexpected sheet headers: {error}")

        if df.empty:
            logger.warning("Sheet has a header row but no movies")
            return [], self.metrics

        logger.info(f"Starting transformation of {len(df)} rows")

        movies = [
            map_row(row, self.layout, row_number=idx)
            for idx, row in enumerate(df.itertuples(index=False, name=None), 1)
        ]

        self.metrics["mapped_rows"] = len(movies)
        self.metrics["poster_urls"] = sum(1 for movie in movies if movie.poster_path)
        self.metrics["backdrop_urls"] = sum(1 for movie in movies if movie.backdrop_path)

        logger.info(
            f"Transformation complete: {len(movies)} movies, "
            f"{self.metrics['poster_urls']} posters, {self.metrics['backdrop_urls']} backdrops"
        )

        return movies, self.metrics


def validate_and_transform(
    df: pd.DataFrame,
    layout: SheetLayout,
) -> Tuple[List[Movie], Dict[str, int]]:
    """
    Convenience function to transform extracted data.

    Args:
        df: Raw DataFrame from extraction
        layout: Fixed sheet layout

    Returns:
        Tuple of (movies, metrics)
    """
    transformer = MovieTransformer(layout)
    return transformer.transform(df)
