"""
ETL Pipeline Orchestrator

Coordinates the complete movie sync:
- Extract the movie sheet from Google Sheets
- Map rows to movie records with TMDb image URLs
- Write the JSON content file
- Log run metrics and errors
"""

import logging
import time
from datetime import datetime, timezone
from typing import Dict, Any, Optional
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import Settings, SheetLayout
from movie_etl.extract import fetch_google_sheet
from movie_etl.transform import validate_and_transform
from movie_etl.load import write_movies

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Handlers installed by setup_logging, replaced on every call
_installed_handlers = []


class ETLOrchestrator:
    """
    Orchestrates the complete ETL pipeline.

    Workflow:
    1. Extract the first worksheet of the movie spreadsheet
    2. Check headers and map each row to a Movie
    3. Write all movies to the JSON content file in one step
    4. Log a run summary

    Any failure aborts the run before the output file is touched.
    """

    def __init__(self, settings: Settings, layout: Optional[SheetLayout] = None):
        """
        Initialize ETL orchestrator.

        Args:
            settings: Configuration object with sheet credentials and output path
            layout: Sheet layout (defaults to the standard movie sheet)
        """
        self.settings = settings
        self.layout = layout or SheetLayout()
        self.start_time: datetime = None
        self.end_time: datetime = None
        self.metrics: Dict[str, Any] = {
            "total_rows": 0,
            "mapped_rows": 0,
            "poster_urls": 0,
            "backdrop_urls": 0,
            "written_rows": 0,
        }

    def run(self) -> bool:
        """
        Execute the complete ETL pipeline.

        Returns:
            True if successful, False otherwise
        """
        self.start_time = datetime.now(timezone.utc)
        started = time.perf_counter()

        try:
            logger.info("=" * 60)
            logger.info("Starting Movie Sync")
            logger.info("=" * 60)

            self._execute_pipeline()

            logger.info("=" * 60)
            logger.info("Movie Sync Completed Successfully")
            logger.info("=" * 60)

            return True

        except Exception as e:
            logger.error(f"Error fetching movies: {e}", exc_info=True)
            return False

        finally:
            self.end_time = datetime.now(timezone.utc)
            self.metrics["duration_seconds"] = time.perf_counter() - started
            self._log_summary()

    def _execute_pipeline(self) -> None:
        """
        Execute the main ETL pipeline.

        Steps:
        1. Extract data from Google Sheets
        2. Transform rows into movie records
        3. Write movie records to the output file
        """
        # EXTRACT
        logger.info("Step 1: Extracting data from Google Sheets...")
        df = fetch_google_sheet(self.settings)
        self.metrics["total_rows"] = len(df)

        # TRANSFORM
        logger.info("Step 2: Mapping rows to movies...")
        movies, transform_metrics = validate_and_transform(df, self.layout)
        self.metrics["mapped_rows"] = transform_metrics["mapped_rows"]
        self.metrics["poster_urls"] = transform_metrics["poster_urls"]
        self.metrics["backdrop_urls"] = transform_metrics["backdrop_urls"]

        # LOAD
        logger.info(f"Step 3: Writing {len(movies)} movies to {self.settings.OUTPUT_FILE}...")
        self.metrics["written_rows"] = write_movies(movies, self.settings.OUTPUT_FILE)

    def _log_summary(self) -> None:
        """Log ETL execution summary with all metrics."""
        logger.info(f"Duration: {self.metrics['duration_seconds']:.2f} seconds")
        logger.info(f"Total rows extracted: {self.metrics['total_rows']}")
        logger.info(f"Movies mapped: {self.metrics['mapped_rows']}")
        logger.info(f"Poster URLs built: {self.metrics['poster_urls']}")
        logger.info(f"Backdrop URLs built: {self.metrics['backdrop_urls']}")
        logger.info(f"Movies written: {self.metrics['written_rows']}")


def setup_logging(log_file: Optional[str] = "logs/etl.log", level: str = "INFO") -> None:
    """
    Configure logging for ETL pipeline.

    Safe to call again; handlers from an earlier call are replaced.

    Args:
        log_file: Path to log file, or None for console output only
        level: Console log level name
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = []

    # File handler
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    for handler in handlers:
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)


def main() -> None:
    """Main entry point for ETL pipeline."""
    # Console only until Settings says where the log file goes
    setup_logging(log_file=None)

    try:
        settings = Settings()
        setup_logging(settings.LOG_FILE, settings.LOG_LEVEL)
        logger.debug(f"Loaded {settings!r}")

        orchestrator = ETLOrchestrator(settings, SheetLayout())
        success = orchestrator.run()
        sys.exit(0 if success else 1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
