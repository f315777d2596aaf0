"""
Data access layer.
"""

from .base import LunchRepository
from .duckdb_repository import DuckDBLunchRepository

__all__ = ["LunchRepository", "DuckDBLunchRepository"]
