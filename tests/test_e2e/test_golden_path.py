"""Teste E2E do golden path: bootstrap real + transport httpx mockado."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from api.validators.apperian import PublishOptions, build_workflow_config
from app.bootstrap import create_publish_use_case
from app.domain import PublishStatus
from config.settings import ApperianSettings

EASE_URL = "https://ease.test/ease.interface.php"
WS_BASE_URL = "https://ws.test"
UPLOAD_URL = "https://upload.test/files"
BUNDLE_ID = "com.example.app"


class _ApperianServer:
    """Servidor fake roteado por (método, caminho) ou método JSON-RPC."""

    def __init__(self, routes: dict[tuple[str, str], Any]) -> None:
        self._routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == EASE_URL:
            method = json.loads(request.content)["method"]
            return httpx.Response(200, json={"result": self._routes[("RPC", method)]})
        body = self._routes[(request.method, request.url.path)]
        return httpx.Response(200, json=body)

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]


def _settings(protocol: str) -> ApperianSettings:
    return ApperianSettings(
        protocol=protocol,  # type: ignore[arg-type]
        ease_url=EASE_URL,
        ws_base_url=WS_BASE_URL,
        signing_poll_interval_seconds=0,
    )


def _binary(tmp_path: Path, name: str) -> Path:
    path = tmp_path / name
    path.write_bytes(b"binary")
    return path


@pytest.mark.asyncio
async def test_rest_android_update_with_signing(tmp_path: Path) -> None:
    """Android (operating_system 105) via REST, assinado e habilitado."""
    server = _ApperianServer({
        ("POST", "/v2/catalog/authenticate/"): {"token": "tok-e2e"},
        ("GET", "/v2/applications/"): {"applications": [
            {"id": "a-1", "bundle_id": BUNDLE_ID, "operating_system": 105,
             "version": {"app_name": "App", "version_num": "1.0", "author": "ACME"}},
        ]},
        ("POST", "/v2/applications/a-1/"): {"application": {"id": "a-1"}},
        ("GET", "/v1/credentials/"): {"credentials": [
            {"psk": "p-ios", "description": "Cert", "platform": 1},
            {"psk": "p-android", "description": "Cert", "platform": 2},
        ]},
        ("PUT", "/v1/applications/a-1/credentials/p-android"): {"signing_status": "in_progress"},
        ("GET", "/v1/applications/a-1"): {"application": {"version": {
            "signing_status": "signed", "signing_status_details": "ok",
        }}},
        ("PUT", "/v1/applications/a-1"): {"update_application_result": True},
    })
    config = build_workflow_config(PublishOptions(
        username="ana@example.com",
        password="segredo",
        app_id=BUNDLE_ID,
        file_path=str(_binary(tmp_path, "app.apk")),
        app_type="android",
        app_version="2.0",
        sign="Cert",
    ))
    use_case = create_publish_use_case(
        _settings("rest"), transport=httpx.MockTransport(server)
    )

    result = await use_case.execute(config)

    assert result.status is PublishStatus.SUCCESS, result.error_message
    assert result.application_id == "a-1"
    assert server.paths() == [
        "POST /v2/catalog/authenticate/",
        "GET /v2/applications/",
        "POST /v2/applications/a-1/",
        "GET /v1/credentials/",
        "PUT /v1/applications/a-1/credentials/p-android",
        "GET /v1/applications/a-1",
        "PUT /v1/applications/a-1",
    ]
    assert all(r.headers["X-TOKEN"] == "tok-e2e" for r in server.requests[1:])
    upload = server.requests[2].content
    assert b'"version_num": "2.0"' in upload
    assert b'"app_name": "App"' in upload


@pytest.mark.asyncio
async def test_ease_ios_update_publishes_before_enable(tmp_path: Path) -> None:
    """iOS via EASE: update, upload, publish e enable do appID publicado."""
    server = _ApperianServer({
        ("RPC", "com.apperian.eas.user.authenticateuser"): {"token": "tok-ease"},
        ("RPC", "com.apperian.eas.apps.getlist"): {"applications": [
            {"ID": 42, "bundleId": BUNDLE_ID, "type": "IPA"},
        ]},
        ("RPC", "com.apperian.eas.apps.update"): {
            "fileUploadURL": UPLOAD_URL,
            "transactionID": "txn-1",
            "EASEmetadata": {"name": "App", "version": "1.0"},
        },
        ("POST", "/files"): {"fileID": "file-1"},
        ("RPC", "com.apperian.eas.apps.publish"): {"appID": "42"},
        ("PUT", "/v1/applications/42"): {},
    })
    config = build_workflow_config(PublishOptions(
        username="ana@example.com",
        password="segredo",
        app_id=BUNDLE_ID,
        file_path=str(_binary(tmp_path, "app.ipa")),
        app_type="ios",
    ))
    use_case = create_publish_use_case(
        _settings("ease"), transport=httpx.MockTransport(server)
    )

    result = await use_case.execute(config)

    assert result.success, result.error_message
    assert result.application_id == "42"
    assert [entry["to_state"] for entry in result.history] == [
        "AUTHENTICATED",
        "TARGET_RESOLVED",
        "UPLOADED",
        "PUBLISHED",
        "ENABLED",
    ]
    publish = json.loads(server.requests[4].content)
    assert publish["params"]["EASEmetadata"]["name"] == "App"
    assert publish["params"]["files"] == {"application": "file-1"}
    assert server.requests[-1].url.path == "/v1/applications/42"


@pytest.mark.asyncio
async def test_rest_android_update_without_signing_enables_once(tmp_path: Path) -> None:
    """Sem --sign: resolve, upload e um único enable; nenhuma chamada de assinatura."""
    server = _ApperianServer({
        ("POST", "/v2/catalog/authenticate/"): {"token": "tok-e2e"},
        ("GET", "/v2/applications/"): {"applications": [
            {"id": "a-9", "bundle_id": "com.acme.app", "operating_system": 105, "version": {}},
        ]},
        ("POST", "/v2/applications/a-9/"): {"application": {"id": "a-9"}},
        ("PUT", "/v1/applications/a-9"): {"update_application_result": True},
    })
    config = build_workflow_config(PublishOptions(
        username="u",
        password="p",
        app_id="com.acme.app",
        file_path=str(_binary(tmp_path, "app.apk")),
        app_type="android",
    ))
    use_case = create_publish_use_case(
        _settings("rest"), transport=httpx.MockTransport(server)
    )

    result = await use_case.execute(config)

    assert result.status is PublishStatus.SUCCESS, result.error_message
    assert server.paths() == [
        "POST /v2/catalog/authenticate/",
        "GET /v2/applications/",
        "POST /v2/applications/a-9/",
        "PUT /v1/applications/a-9",
    ]


@pytest.mark.asyncio
async def test_malformed_credential_does_not_abort_signing(tmp_path: Path) -> None:
    """Credencial alheia com platform inválido é pulada; a correta assina."""
    server = _ApperianServer({
        ("POST", "/v2/catalog/authenticate/"): {"token": "tok-e2e"},
        ("GET", "/v2/applications/"): {"applications": [
            {"id": "a-3", "bundle_id": BUNDLE_ID, "operating_system": 105},
        ]},
        ("POST", "/v2/applications/a-3/"): {"application": {"id": "a-3"}},
        ("GET", "/v1/credentials/"): {"credentials": [
            {"psk": "x", "description": "Other", "platform": "windows"},
            {"psk": "a", "description": "Cert", "platform": 2},
        ]},
        ("PUT", "/v1/applications/a-3/credentials/a"): {"signing_status": "signed"},
        ("PUT", "/v1/applications/a-3"): {"update_application_result": True},
    })
    config = build_workflow_config(PublishOptions(
        username="u",
        password="p",
        app_id=BUNDLE_ID,
        file_path=str(_binary(tmp_path, "app.apk")),
        app_type="android",
        sign="Cert",
    ))
    use_case = create_publish_use_case(
        _settings("rest"), transport=httpx.MockTransport(server)
    )

    result = await use_case.execute(config)

    assert result.status is PublishStatus.SUCCESS, result.error_message
    assert "PUT /v1/applications/a-3/credentials/a" in server.paths()
