from dataclasses import dataclass

import httpx


class UpstreamError(Exception):
    """Raised when the upstream exchange cannot produce a response."""


class UpstreamRequestError(UpstreamError):
    pass


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamReadError(UpstreamError):
    pass


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    content: bytes
    content_type: str | None = None


async def post_bytes(
    url: str,
    content: bytes,
    headers: dict[str, str],
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UpstreamResponse:
    async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
        try:
            # Inbound values were decoded as latin-1; re-encode so the original bytes go out.
            raw_headers = {name: value.encode("latin-1") for name, value in headers.items()}
            request = client.build_request("POST", url, content=content, headers=raw_headers)
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise UpstreamRequestError(str(exc)) from exc

        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(str(exc) or type(exc).__name__) from exc

        try:
            body = await response.aread()
        except httpx.HTTPError as exc:
            raise UpstreamReadError(str(exc) or type(exc).__name__) from exc
        finally:
            await response.aclose()

    return UpstreamResponse(
        status_code=response.status_code,
        content=body,
        content_type=response.headers.get("content-type"),
    )
