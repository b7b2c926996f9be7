"""Fixtures compartilhadas dos testes do conector Apperian."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from api.connectors.apperian import ApperianHttpClient, create_apperian_http_client
from app.sessions import ApperianSession
from config.settings import ApperianSettings

EASE_URL = "https://ease.test/ease.interface.php"
WS_BASE_URL = "https://ws.test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> ApperianSettings:
    return ApperianSettings(ease_url=EASE_URL, ws_base_url=WS_BASE_URL)


@pytest.fixture
def make_client(settings: ApperianSettings) -> Callable[[Handler], ApperianHttpClient]:
    def _make(handler: Handler) -> ApperianHttpClient:
        return create_apperian_http_client(settings, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def binary(tmp_path: Path) -> Path:
    path = tmp_path / "app.ipa"
    path.write_bytes(b"PK\x03\x04binary")
    return path


class _TokenAuthenticator:
    async def authenticate(self, username: str, password: str, device_id: str) -> str:
        return "tok-abc"


@pytest_asyncio.fixture
async def session() -> ApperianSession:
    authenticated = ApperianSession()
    await authenticated.authenticate(_TokenAuthenticator(), "ana", "segredo", "device")
    return authenticated
