"""Service-account authorisation for the Sheets API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from google.auth.transport.requests import Request
from google.oauth2.service_account import Credentials

if TYPE_CHECKING:
    from algowiki.config.sheets import SheetsConfig

log = getLogger(__name__)


def authorization_headers(config: SheetsConfig) -> dict[str, str]:
    """Bearer header for the configured service account, empty without one.

    A fresh token is requested on every call.
    """

    if config.credentials_info is None:
        return {}
    credentials = Credentials.from_service_account_info(
        dict(config.credentials_info),
        scopes=list(config.scopes),
    )
    credentials.refresh(Request())
    log.debug(f"Authorised as {credentials.service_account_email}")
    return {"Authorization": f"Bearer {credentials.token}"}
