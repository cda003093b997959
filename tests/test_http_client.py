import httpx
import pytest

from upload_relay.adapter.client.http import (
    UpstreamReadError,
    UpstreamTransportError,
    post_bytes,
)


class _BrokenStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset")
        yield b""  # pragma: no cover


@pytest.mark.asyncio
async def test_post_bytes_sends_body_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"id":"abc"}', headers={"content-type": "application/json"})

    response = await post_bytes(
        "https://upstream.test/upload",
        b"\x00\x01payload",
        {"X-FileName": "a.bin", "X-PendingId": ""},
        transport=httpx.MockTransport(handler),
    )

    assert response.status_code == 200
    assert response.content == b'{"id":"abc"}'
    assert response.content_type == "application/json"
    assert seen[0].method == "POST"
    assert seen[0].content == b"\x00\x01payload"
    assert seen[0].headers["X-FileName"] == "a.bin"
    assert seen[0].headers["X-PendingId"] == ""


@pytest.mark.asyncio
async def test_post_bytes_returns_error_statuses_without_raising() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, content=b"overloaded"))

    response = await post_bytes("https://upstream.test/upload", b"data", {}, transport=transport)

    assert response.status_code == 503
    assert response.content == b"overloaded"


@pytest.mark.asyncio
async def test_post_bytes_follows_redirects_with_body() -> None:
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        if request.url.path == "/upload":
            return httpx.Response(307, headers={"location": "https://upstream.test/v2/upload"})
        return httpx.Response(200, content=b"stored")

    response = await post_bytes(
        "https://upstream.test/upload", b"data", {}, transport=httpx.MockTransport(handler)
    )

    assert response.status_code == 200
    assert response.content == b"stored"
    assert bodies == [b"data", b"data"]


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamTransportError, match="connection refused"):
        await post_bytes("https://upstream.test/upload", b"data", {}, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_unsupported_scheme_raises_transport_error() -> None:
    with pytest.raises(UpstreamTransportError):
        await post_bytes("ftp://upstream.test/upload", b"data", {})


@pytest.mark.asyncio
async def test_broken_response_body_raises_read_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, stream=_BrokenStream()))

    with pytest.raises(UpstreamReadError, match="connection reset"):
        await post_bytes("https://upstream.test/upload", b"data", {}, transport=transport)


@pytest.mark.asyncio
async def test_latin1_decoded_header_values_are_sent_as_original_bytes() -> None:
    original = "Café €.pdf".encode("utf-8")
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    await post_bytes(
        "https://upstream.test/upload",
        b"data",
        {"X-FileName": original.decode("latin-1")},
        transport=httpx.MockTransport(handler),
    )

    raw = [value for key, value in seen[0].headers.raw if key.lower() == b"x-filename"]
    assert raw == [original]
