import logging

from fastapi import HTTPException

from upload_relay.adapter.client.http import (
    UpstreamReadError,
    UpstreamRequestError,
    UpstreamResponse,
    UpstreamTransportError,
    post_bytes,
)
from upload_relay.config import Settings
from upload_relay.schemas import UploadMetadata
from upload_relay.security.auth import upstream_auth_headers

logger = logging.getLogger("upload_relay.proxy")

PROXY_FAILURE = "Internal Server Error during proxy."


async def forward_upload(settings: Settings, body: bytes, metadata: UploadMetadata) -> UpstreamResponse:
    """Send one buffered upload upstream and return its successful response.

    Any failure is raised as an HTTPException carrying the status the client
    should see.
    """
    headers = metadata.to_upstream_headers()
    headers.update(upstream_auth_headers(settings))

    logger.info("Receiving %d bytes. Forwarding to %s", len(body), settings.upstream_url)

    try:
        response = await post_bytes(
            settings.upstream_url,
            body,
            headers,
            timeout=settings.upstream_timeout_s,
        )
    except UpstreamRequestError as exc:
        logger.error("Error creating upstream request: %s", exc)
        raise HTTPException(status_code=500, detail=PROXY_FAILURE) from exc
    except UpstreamTransportError as exc:
        logger.error("Error forwarding upload upstream: %s", exc)
        raise HTTPException(status_code=500, detail=PROXY_FAILURE) from exc
    except UpstreamReadError as exc:
        logger.error("Error reading upstream response: %s", exc)
        raise HTTPException(status_code=500, detail="Error reading upstream response.") from exc

    if response.status_code != 200:
        text = response.content.decode("utf-8", errors="replace")
        logger.warning("Upstream error: %d %s", response.status_code, text)
        raise HTTPException(status_code=response.status_code, detail=f"Upstream error: {text}")

    return response
