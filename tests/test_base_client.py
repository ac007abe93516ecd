import asyncio
from unittest.mock import patch

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import test_utils, web
from tenacity import wait_none

from dinescore.data_collection.base_client import BaseProviderClient
from dinescore.errors import ProviderUnavailable
from dinescore.models import Platform


class _ProviderClient(BaseProviderClient):
    platform = Platform.YELP


async def _ok(request):
    return web.json_response({
        "params": dict(request.query),
        "accept": request.headers.get("Accept"),
    })


async def _server_error(request):
    return web.Response(status=500, text="upstream exploded")


async def _list_payload(request):
    return web.json_response([{"id": 1}])


async def _html_page(request):
    return web.Response(text="<html>maintenance</html>", content_type="text/html")


async def _broken_json(request):
    return web.Response(text='{"businesses": [', content_type="application/json")


@pytest_asyncio.fixture
async def provider_server():
    app = web.Application()
    app.router.add_get("/ok", _ok)
    app.router.add_get("/error", _server_error)
    app.router.add_get("/list", _list_payload)
    app.router.add_get("/html", _html_page)
    app.router.add_get("/broken", _broken_json)
    server = test_utils.TestServer(app)
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(BaseProviderClient._request_json.retry, "wait", wait_none())


def _client(settings, server) -> _ProviderClient:
    client = _ProviderClient(settings)
    client.base_url = str(server.make_url("/")).rstrip("/")
    return client


@pytest.mark.asyncio
async def test_get_json_returns_payload(settings, provider_server):
    client = _client(settings, provider_server)

    payload = await client._get_json("/ok", {"term": "tacos"})

    assert payload == {"params": {"term": "tacos"}, "accept": "application/json"}
    assert client.api_calls == 1


@pytest.mark.asyncio
async def test_server_error_is_provider_unavailable_without_retry(settings, provider_server):
    client = _client(settings, provider_server)

    with pytest.raises(ProviderUnavailable) as exc_info:
        await client._get_json("/error")

    assert exc_info.value.platform == "Yelp"
    assert "HTTP 500" in exc_info.value.reason
    assert "upstream exploded" in exc_info.value.reason
    assert client.api_calls == 1


@pytest.mark.asyncio
async def test_list_payload_is_rejected(settings, provider_server):
    client = _client(settings, provider_server)

    with pytest.raises(ProviderUnavailable) as exc_info:
        await client._get_json("/list")

    assert "unexpected payload type list" in exc_info.value.reason


@pytest.mark.asyncio
@pytest.mark.parametrize("endpoint", ["/html", "/broken"])
async def test_non_json_body_is_provider_unavailable(settings, provider_server, endpoint):
    client = _client(settings, provider_server)

    with pytest.raises(ProviderUnavailable):
        await client._get_json(endpoint)


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()])
async def test_transient_errors_retry_three_times_then_map(settings, no_retry_wait, error):
    client = _ProviderClient(settings)
    client.base_url = "http://provider.invalid"

    with patch("aiohttp.ClientSession.get", side_effect=error) as mock_get:
        with pytest.raises(ProviderUnavailable) as exc_info:
            await client._get_json("/businesses/search")

    assert mock_get.call_count == 3
    assert type(error).__name__ in exc_info.value.reason
    assert client.api_calls == 0


@pytest.mark.asyncio
async def test_connection_recovers_on_retry(settings, no_retry_wait, provider_server):
    client = _client(settings, provider_server)
    real_get = aiohttp.ClientSession.get
    calls = []

    def flaky_get(session, url, **kwargs):
        calls.append(url)
        if len(calls) == 1:
            raise aiohttp.ClientConnectionError("reset by peer")
        return real_get(session, url, **kwargs)

    with patch("aiohttp.ClientSession.get", autospec=True, side_effect=flaky_get):
        payload = await client._get_json("/ok")

    assert len(calls) == 2
    assert payload["accept"] == "application/json"
