"""HTTP client for the Google Sheets values API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from google.auth.exceptions import GoogleAuthError
from pydantic import ValidationError

from algowiki.adapters.http_resilience import ResilientClient
from algowiki.config.sheets import SheetsConfig, get_sheets_config
from algowiki.domain.ports.fetching import SourceFetcher, SourceFetchError
from algowiki.domain.sources import SourceTable, SourceTables

from .auth import authorization_headers
from .schema import ErrorResponse, ValueRange
from .translator import rows_from_values

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from algowiki.config.http_resilience import ResilienceConfig
    from algowiki.domain.sources import SourceRow

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SheetsAPIError(SourceFetchError):
    """Raised when a tab cannot be read from the Sheets API."""

    def __init__(self, message: str, *, tab: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.tab = tab
        self.status = status


@dataclass(slots=True)
class SheetsFetcher:
    """Reads every catalog tab concurrently and returns them as one :class:`SourceTables`."""

    config: SheetsConfig = field(default_factory=get_sheets_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    authorize: Callable[[SheetsConfig], Mapping[str, str]] = field(default=authorization_headers)
    tabs: tuple[SourceTable, ...] = tuple(SourceTable)

    def __call__(self) -> SourceTables:
        return asyncio.run(self._fetch_all(self._authorised_resilience()))

    def _authorised_resilience(self) -> ResilienceConfig:
        try:
            headers = self.authorize(self.config)
        except (GoogleAuthError, ValueError) as exc:
            raise SheetsAPIError("Could not authorise against the Sheets API") from exc
        resilience = self.config.resilience
        if not headers:
            return resilience
        merged = {**(resilience.default_headers or {}), **headers}
        return replace(resilience, default_headers=merged)

    async def _fetch_all(self, resilience: ResilienceConfig) -> SourceTables:
        async with self.client_factory(resilience) as client:
            results = await asyncio.gather(*(self._fetch_tab(client, tab) for tab in self.tabs))
        return SourceTables.from_tabs(dict(zip(self.tabs, results, strict=True)))

    def tab_url(self, tab: SourceTable) -> str:
        cell_range = quote(f"{tab.value}{self.config.range_suffix}", safe="")
        return f"{self.config.spreadsheet_id}/values/{cell_range}"

    def _params(self) -> dict[str, str] | None:
        return {"key": self.config.api_key} if self.config.api_key else None

    async def _fetch_tab(self, client: ResilientClient, tab: SourceTable) -> tuple[SourceRow, ...]:
        try:
            response = await client.get(self.tab_url(tab), params=self._params())
        except httpx.HTTPError as exc:
            raise SheetsAPIError(f"Could not reach the Sheets API for {tab.value!r}", tab=tab.value) from exc

        if response.is_error:
            message = _error_message(response)
            log.error(f"Sheets API error {response.status_code} on {tab.value!r}: {message}")
            raise SheetsAPIError(message, tab=tab.value, status=response.status_code)

        try:
            value_range = ValueRange.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SheetsAPIError(f"Unexpected payload for {tab.value!r}", tab=tab.value) from exc

        rows = rows_from_values(value_range.values)
        log.debug(f"Fetched {len(rows)} rows from {tab.value!r}")
        return rows


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).error.message or response.reason_phrase
    except (ValueError, ValidationError):
        return response.reason_phrase


if TYPE_CHECKING:
    _fetcher_check: SourceFetcher = SheetsFetcher()
