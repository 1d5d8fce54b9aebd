"""Google Sheets source configuration values."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

SHEETS_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets/"
SHEETS_TIMEOUT_SECONDS = 30.0
SHEETS_RANGE_SUFFIX = "!A1:ZZ"
SHEETS_SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)


def default_sheets_resilience() -> ResilienceConfig:
    # the values API allows 300 reads per minute per project
    return ResilienceConfig(
        name="google-sheets",
        base_url=SHEETS_BASE_URL,
        timeout_seconds=SHEETS_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


@dataclass(frozen=True)
class SheetsConfig:
    """Holds the spreadsheet coordinates, credentials and HTTP behaviour for source fetching.

    ``credentials_info`` is a service-account key as parsed from JSON; when it is
    set, requests carry a bearer token. ``api_key`` is only enough for sheets
    shared publicly.
    """

    spreadsheet_id: str
    api_key: str | None = None
    credentials_info: Mapping[str, Any] | None = None
    scopes: tuple[str, ...] = SHEETS_SCOPES
    resilience: ResilienceConfig = field(default_factory=default_sheets_resilience)
    range_suffix: str = SHEETS_RANGE_SUFFIX


def _credentials_from_env() -> dict[str, Any] | None:
    raw = os.getenv("GOOGLE_CREDENTIALS")
    if raw is None or not raw.strip():
        return None
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("GOOGLE_CREDENTIALS is not valid JSON") from exc
    if not isinstance(info, dict):
        raise ConfigurationError("GOOGLE_CREDENTIALS must be a JSON object")
    return info


def get_sheets_config(*, resilience: ResilienceConfig | None = None) -> SheetsConfig:
    spreadsheet_id = require_env_vars(("SPREAD_SHEET_ID",))["SPREAD_SHEET_ID"]
    credentials_info = _credentials_from_env()
    api_key = (os.getenv("GOOGLE_SHEETS_API_KEY") or "").strip() or None
    if credentials_info is None and api_key is None:
        raise MissingConfigurationError(
            "Missing configuration for: GOOGLE_CREDENTIALS or GOOGLE_SHEETS_API_KEY"
        )
    return SheetsConfig(
        spreadsheet_id=spreadsheet_id,
        api_key=api_key,
        credentials_info=credentials_info,
        resilience=resilience or default_sheets_resilience(),
    )
