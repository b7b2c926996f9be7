"""Testes do RestV2Adapter e das chamadas REST v1 compartilhadas."""

from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.apperian import RestV2Adapter
from app.domain import AppMetadata, Platform, RemoteApplication, SigningStatus, UploadTicket
from utils.errors import PublishError, RemoteProtocolError, UnsupportedOperationError

WS_BASE_URL = "https://ws.test"


def _recording(response: httpx.Response, seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return handler


class TestRestAuthentication:
    """Login v2."""

    @pytest.mark.asyncio
    async def test_sends_device_id(self, make_client, settings) -> None:
        """Login envia user_id, password e device_id."""
        seen: list[httpx.Request] = []
        adapter = RestV2Adapter(
            make_client(_recording(httpx.Response(200, json={"token": "tok-2"}), seen)),
            settings,
        )

        token = await adapter.authenticate("ana", "segredo", "device-1")

        assert token == "tok-2"
        assert str(seen[0].url) == f"{WS_BASE_URL}/v2/catalog/authenticate/"
        assert json.loads(seen[0].content) == {
            "user_id": "ana",
            "password": "segredo",
            "device_id": "device-1",
        }

    @pytest.mark.asyncio
    async def test_missing_token_returns_none(self, make_client, settings) -> None:
        """Resposta sem token devolve None para a sessão decidir."""
        adapter = RestV2Adapter(make_client(lambda r: httpx.Response(200, json={})), settings)
        assert await adapter.authenticate("ana", "segredo", "d") is None


class TestRestApplications:
    """Lista v2 e códigos de operating_system."""

    @pytest.mark.asyncio
    async def test_android_matches_either_code(self, make_client, settings, session) -> None:
        """Android aceita 105 e 106; iOS só 104."""
        body = {
            "applications": [
                {"id": 1, "bundle_id": "com.example.app", "operating_system": 105,
                 "version": {"app_name": "App", "version_num": "3.1"}},
                {"id": 2, "bundle_id": "com.example.app", "operating_system": 106},
                {"id": 3, "bundle_id": "com.example.app", "operating_system": 104},
            ]
        }
        seen: list[httpx.Request] = []
        adapter = RestV2Adapter(make_client(_recording(httpx.Response(200, json=body), seen)), settings)

        apps = await adapter.list_applications(session)

        assert seen[0].headers["X-TOKEN"] == "tok-abc"
        assert apps[0].metadata.name == "App"
        assert apps[0].metadata.version == "3.1"
        assert [adapter.matches_platform(a, Platform.ANDROID) for a in apps] == [True, True, False]
        assert adapter.matches_platform(apps[2], Platform.IOS)
        assert not adapter.matches_platform(apps[2], Platform.MICROSOFT)

    def test_non_numeric_code_never_matches(self, settings) -> None:
        """Código não numérico não casa com nenhuma plataforma."""
        adapter = RestV2Adapter(None, settings)  # type: ignore[arg-type]
        app = RemoteApplication(application_id="1", type_code="android")
        assert not adapter.matches_platform(app, Platform.ANDROID)


class TestRestUpload:
    """Upload v2 sem etapa de publish."""

    @pytest.mark.asyncio
    async def test_open_upload_for_create_makes_no_call(self, settings, session) -> None:
        """Create aponta para applications/ sem chamada de rede."""
        adapter = RestV2Adapter(None, settings)  # type: ignore[arg-type]
        ticket = await adapter.open_upload(session, None)
        assert ticket.upload_url == f"{WS_BASE_URL}/v2/applications/"
        assert ticket.application_id is None

    @pytest.mark.asyncio
    async def test_upload_sends_metadata_and_returns_application_id(
        self, make_client, settings, session, binary
    ) -> None:
        """app_file + data JSON; id vem de application.id."""
        seen: list[httpx.Request] = []
        response = httpx.Response(200, json={"application": {"id": "a-5"}})
        adapter = RestV2Adapter(make_client(_recording(response, seen)), settings)
        ticket = UploadTicket(upload_url=f"{WS_BASE_URL}/v2/applications/a-5/")

        result = await adapter.upload_binary(
            session, ticket, binary, AppMetadata(name="App", version_notes="v")
        )

        assert result.application_id == "a-5"
        content = seen[0].content
        assert b'name="app_file"' in content
        assert b'"app_name": "App"' in content
        assert b'"version_note": "v"' in content

    @pytest.mark.asyncio
    async def test_upload_without_application_id_fails(self, make_client, settings, session, binary) -> None:
        """Resposta sem application.id é erro de protocolo."""
        adapter = RestV2Adapter(make_client(lambda r: httpx.Response(200, json={})), settings)
        ticket = UploadTicket(upload_url=f"{WS_BASE_URL}/v2/applications/")

        with pytest.raises(RemoteProtocolError):
            await adapter.upload_binary(session, ticket, binary, AppMetadata())

    @pytest.mark.asyncio
    async def test_publish_is_not_supported(self, settings, session) -> None:
        """REST não tem etapa de publish; a chamada vira erro fatal tipado."""
        adapter = RestV2Adapter(None, settings)  # type: ignore[arg-type]
        assert adapter.requires_publish is False
        with pytest.raises(UnsupportedOperationError) as exc_info:
            await adapter.publish(session, UploadTicket(upload_url="u"), None, AppMetadata())  # type: ignore[arg-type]
        assert isinstance(exc_info.value, PublishError)
        assert exc_info.value.code == "UNSUPPORTED_OPERATION"


class TestSharedV1Calls:
    """Assinatura e habilitação (REST v1)."""

    @pytest.mark.asyncio
    async def test_list_signing_credentials(self, make_client, settings, session) -> None:
        """GET credentials/ com corpo enabled=true."""
        body = {"credentials": [
            {"psk": 77, "description": "Cert", "platform": 1},
            {"description": "sem psk"},
        ]}
        seen: list[httpx.Request] = []
        adapter = RestV2Adapter(make_client(_recording(httpx.Response(200, json=body), seen)), settings)

        credentials = await adapter.list_signing_credentials(session)

        assert str(seen[0].url) == f"{WS_BASE_URL}/v1/credentials/"
        assert seen[0].method == "GET"
        assert json.loads(seen[0].content) == {"enabled": True}
        assert len(credentials) == 1
        assert credentials[0].psk == "77"
        assert credentials[0].platform == 1

    @pytest.mark.asyncio
    async def test_malformed_credential_is_skipped(self, make_client, settings, session, caplog) -> None:
        """Credencial com platform não numérico é ignorada; as demais seguem."""
        body = {"credentials": [
            {"psk": "x", "description": "Other", "platform": "windows"},
            {"psk": "a", "description": "Cert", "platform": 2},
        ]}
        adapter = RestV2Adapter(make_client(lambda r: httpx.Response(200, json=body)), settings)

        with caplog.at_level("WARNING"):
            credentials = await adapter.list_signing_credentials(session)

        assert [(c.psk, c.platform) for c in credentials] == [("a", 2)]
        assert any(r.getMessage() == "signing_credential_invalid" for r in caplog.records)

    @pytest.mark.asyncio
    async def test_enable_signing_and_status(self, make_client, settings, session) -> None:
        """PUT credentials/{psk} e GET applications/{id} leem o status."""
        responses = iter([
            httpx.Response(200, json={"signing_status": "in_progress"}),
            httpx.Response(200, json={"application": {"version": {
                "signing_status": "error",
                "signing_status_details": "certificado expirado",
            }}}),
        ])
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return next(responses)

        adapter = RestV2Adapter(make_client(handler), settings)

        started = await adapter.enable_signing(session, "a-5", "psk-1")
        status = await adapter.get_signing_status(session, "a-5")

        assert str(seen[0].url) == f"{WS_BASE_URL}/v1/applications/a-5/credentials/psk-1"
        assert seen[0].method == "PUT"
        assert started.status is SigningStatus.IN_PROGRESS
        assert status.status is SigningStatus.ERROR
        assert status.detail == "certificado expirado"

    @pytest.mark.asyncio
    async def test_status_without_version_is_protocol_error(self, make_client, settings, session) -> None:
        """Resposta sem application.version é erro de protocolo."""
        adapter = RestV2Adapter(make_client(lambda r: httpx.Response(200, json={"application": {}})), settings)
        with pytest.raises(RemoteProtocolError):
            await adapter.get_signing_status(session, "a-5")

    @pytest.mark.asyncio
    async def test_enable_application_is_put_enabled(self, make_client, settings, session) -> None:
        """PUT applications/{id} com enabled=true."""
        seen: list[httpx.Request] = []
        response = httpx.Response(200, json={"update_application_result": True})
        adapter = RestV2Adapter(make_client(_recording(response, seen)), settings)

        data = await adapter.enable_application(session, "a-5")

        assert data == {"update_application_result": True}
        assert seen[0].method == "PUT"
        assert str(seen[0].url) == f"{WS_BASE_URL}/v1/applications/a-5"
        assert json.loads(seen[0].content) == {"enabled": True}
