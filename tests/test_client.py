"""Tests for OmniAPIConfig and ApiClient."""

import httpx
import pytest

from omniapi_mcp_server.client import (
    ApiClient,
    ApiNotFoundError,
    OmniAPIConfig,
    OmniAPIError,
    UnknownToolError,
)


# ---------------------------------------------------------------------------
# OmniAPIConfig
# ---------------------------------------------------------------------------


class TestOmniAPIConfig:
    def test_default_config(self):
        cfg = OmniAPIConfig()
        assert cfg.timeout is None
        assert cfg.log_level == "INFO"
        assert cfg.log_json is True

    def test_env_var_loading(self, monkeypatch):
        monkeypatch.setenv("OMNIAPI_TIMEOUT", "2.5")
        monkeypatch.setenv("OMNIAPI_LOG_JSON", "false")
        cfg = OmniAPIConfig()
        assert cfg.timeout == 2.5
        assert cfg.log_json is False


# ---------------------------------------------------------------------------
# ApiClient
# ---------------------------------------------------------------------------


class TestApiClient:
    async def test_request_returns_response_for_any_status(self, httpx_mock):
        httpx_mock.add_response(
            url="https://h.test/missing",
            status_code=404,
            json={"detail": "Not found"},
        )
        async with ApiClient() as client:
            response = await client.request("GET", "https://h.test/missing")
        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}

    async def test_request_sends_headers_and_content(self, httpx_mock):
        httpx_mock.add_response(url="https://h.test/items", method="POST")
        async with ApiClient() as client:
            await client.request(
                "POST",
                "https://h.test/items",
                headers={"X-Api-Key": "k1"},
                content='{"a": 1}',
            )
        request = httpx_mock.get_request()
        assert request.headers["X-Api-Key"] == "k1"
        assert request.content == b'{"a": 1}'

    async def test_request_network_error_wrapped(self, httpx_mock):
        httpx_mock.add_exception(
            httpx.ConnectError("Connection refused"),
            url="https://h.test/items",
        )
        async with ApiClient() as client:
            with pytest.raises(OmniAPIError, match="Request failed"):
                await client.request("GET", "https://h.test/items")

    async def test_probe_lets_transport_errors_through(self, httpx_mock):
        httpx_mock.add_exception(
            httpx.ConnectError("Connection refused"),
            url="https://h.test/health",
        )
        async with ApiClient() as client:
            with pytest.raises(httpx.ConnectError):
                await client.probe("HEAD", "https://h.test/health")

    async def test_timeout_applied_when_configured(self):
        client = ApiClient(OmniAPIConfig(timeout=3))
        await client._ensure_client()
        try:
            assert client.client.timeout.connect == 3
            assert client.client.timeout.read == 3
        finally:
            await client.close()

    async def test_no_timeout_by_default(self):
        client = ApiClient(OmniAPIConfig())
        await client._ensure_client()
        try:
            assert client.client.timeout.connect is None
            assert client.client.timeout.read is None
            assert client.client.timeout.pool is None
        finally:
            await client.close()

    async def test_close_resets_client(self):
        client = ApiClient()
        await client._ensure_client()
        await client.close()
        assert client.client is None


class TestErrors:
    def test_error_hierarchy(self):
        err = OmniAPIError("Request failed: boom")
        assert str(err) == "Request failed: boom"
        assert not hasattr(err, "status_code")
        assert issubclass(ApiNotFoundError, OmniAPIError)
        assert issubclass(UnknownToolError, OmniAPIError)
