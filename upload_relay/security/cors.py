import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from upload_relay.schemas import RELAY_HEADERS

logger = logging.getLogger("upload_relay.cors")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": ", ".join(RELAY_HEADERS),
}


class PermissiveCorsMiddleware(BaseHTTPMiddleware):
    """Open CORS for browser uploads.

    Every response carries the allow headers, including the 500 for an
    unhandled error. Preflight requests are answered here with an empty 200
    and never reach the routes.
    """

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = PlainTextResponse("Internal Server Error", status_code=500)
        response.headers.update(CORS_HEADERS)
        return response


def setup_cors(app: FastAPI) -> None:
    app.add_middleware(PermissiveCorsMiddleware)
