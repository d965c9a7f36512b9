import asyncio

import httpx
import pytest

from services import probe_service, release_service
from services.exceptions import NonSuccessStatus, TransportError, UpstreamQueryError
from services.url_service import ReleaseRef


def _client(handler, **kwargs):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), **kwargs)


def _probe(handler, url="https://files.example/a.zip"):
    async def _go():
        async with _client(handler, follow_redirects=True) as client:
            return await probe_service.probe(client, url)

    return asyncio.run(_go())


def test_probe_follows_redirects():
    def handler(request):
        if request.url.host == "files.example":
            return httpx.Response(302, headers={"Location": "https://cdn.example/a.zip"})
        return httpx.Response(200)

    assert _probe(handler) == 200


def test_probe_non_200():
    with pytest.raises(NonSuccessStatus) as info:
        _probe(lambda request: httpx.Response(204))

    assert info.value.status_code == 204
    assert info.value.status_text == "No Content"


def test_probe_timeout_without_message():
    def handler(request):
        raise httpx.ReadTimeout("")

    with pytest.raises(TransportError) as info:
        _probe(handler)

    assert info.value.status_code is None
    assert info.value.status_text == "ReadTimeout"


def test_probe_client_logs_insecure_mode(caplog):
    async def _go():
        async with probe_service.create_client(timeout=1.0, verify_tls=False):
            pass

    with caplog.at_level("WARNING"):
        asyncio.run(_go())

    assert any("DISABLED" in record.message for record in caplog.records)


def test_probe_value_error_is_a_transport_error():
    def handler(request):
        raise ValueError("Malformed A-label")

    with pytest.raises(TransportError) as info:
        _probe(handler)

    assert info.value.status_code is None
    assert info.value.status_text == "Malformed A-label"


def _latest(handler):
    async def _go():
        async with _client(handler, base_url="https://api.example") as client:
            return await release_service.fetch_latest_tag(client, ReleaseRef("o", "r", "v1"))

    return asyncio.run(_go())


def test_latest_tag():
    assert _latest(lambda request: httpx.Response(200, json={"tag_name": "v3"})) == "v3"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404, json={"message": "Not Found"}),
        httpx.Response(200, json={"name": "no tag"}),
        httpx.Response(200, json=["v1"]),
        httpx.Response(200, text="not json"),
    ],
)
def test_latest_tag_failures(response):
    with pytest.raises(UpstreamQueryError):
        _latest(lambda request: response)


def test_latest_tag_network_failure():
    def handler(request):
        raise httpx.ConnectError("dns failure")

    with pytest.raises(UpstreamQueryError, match="dns failure"):
        _latest(handler)


@pytest.mark.parametrize(
    "current, latest, expected",
    [("v1", "v2", True), ("v1", "v1", False), ("v1", "v2-rc1", False)],
)
def test_is_newer_release(current, latest, expected):
    assert release_service.is_newer_release(current, latest) is expected


def test_latest_tag_value_error():
    def handler(request):
        raise ValueError("bad url")

    with pytest.raises(UpstreamQueryError, match="bad url"):
        _latest(handler)
