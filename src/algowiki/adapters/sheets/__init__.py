"""Public interface for the Google Sheets adapter."""

from __future__ import annotations

from .auth import authorization_headers
from .client import SheetsAPIError, SheetsFetcher
from .schema import ValueRange
from .translator import HEADER_RENAMES, clean_cell, rows_from_values, to_camel_case

__all__ = [
    "HEADER_RENAMES",
    "SheetsAPIError",
    "SheetsFetcher",
    "ValueRange",
    "authorization_headers",
    "clean_cell",
    "rows_from_values",
    "to_camel_case",
]
