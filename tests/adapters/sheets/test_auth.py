from __future__ import annotations

from typing import Any

import pytest

from algowiki.adapters.sheets import auth
from algowiki.config.sheets import SHEETS_SCOPES, SheetsConfig


class FakeCredentials:
    created: list[FakeCredentials] = []  # noqa: RUF012

    def __init__(self, info: dict[str, Any], scopes: list[str]) -> None:
        self.info = info
        self.scopes = scopes
        self.token: str | None = None
        self.service_account_email = info.get("client_email", "")
        self.refreshed_with: object = None

    @classmethod
    def from_service_account_info(cls, info: dict[str, Any], *, scopes: list[str]) -> FakeCredentials:
        credentials = cls(info, scopes)
        cls.created.append(credentials)
        return credentials

    def refresh(self, request: object) -> None:
        self.refreshed_with = request
        self.token = "ya29.token"


@pytest.fixture
def fake_credentials(monkeypatch: pytest.MonkeyPatch) -> type[FakeCredentials]:
    FakeCredentials.created = []
    monkeypatch.setattr(auth, "Credentials", FakeCredentials)
    monkeypatch.setattr(auth, "Request", lambda: "transport")
    return FakeCredentials


def test_service_account_yields_bearer_header(fake_credentials: type[FakeCredentials]) -> None:
    info = {"type": "service_account", "client_email": "bot@example.iam.gserviceaccount.com"}
    config = SheetsConfig(spreadsheet_id="sheet-123", credentials_info=info)

    headers = auth.authorization_headers(config)

    assert headers == {"Authorization": "Bearer ya29.token"}
    (credentials,) = fake_credentials.created
    assert credentials.info == info
    assert credentials.scopes == list(SHEETS_SCOPES)
    assert credentials.refreshed_with == "transport"


def test_api_key_only_needs_no_token(fake_credentials: type[FakeCredentials]) -> None:
    config = SheetsConfig(spreadsheet_id="sheet-123", api_key="secret")

    assert auth.authorization_headers(config) == {}
    assert fake_credentials.created == []
