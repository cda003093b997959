import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from upload_relay.api.health.endpoint import router as health_router
from upload_relay.api.upload.endpoint import router as upload_router
from upload_relay.config import Settings, settings as default_settings
from upload_relay.observability import RequestLoggingMiddleware, configure_logging
from upload_relay.security.cors import setup_cors

logger = logging.getLogger(__name__)


async def plain_text_http_error(_: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(settings: Settings = default_settings) -> FastAPI:
    configure_logging(settings)

    app = FastAPI(title="Upload Relay", version="0.1.0")
    app.state.settings = settings
    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)

    # Last added runs first: access logging sees the CORS short-circuit too.
    setup_cors(app)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(upload_router)
    return app


app = create_app()
