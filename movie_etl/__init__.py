"""
Movie Sheet ETL Package

Pulls the movie list from a Google Sheet and publishes it as a static JSON file.

Modules:
- extract: Data extraction from Google Sheets
- validator: Header and row shape checks
- models: Fixed-shape movie record
- transform: Column renaming and TMDb image URLs
- load: JSON file output
- run_etl: Pipeline orchestration
"""

__version__ = "1.0.0"
__author__ = "Data Engineering Team"
