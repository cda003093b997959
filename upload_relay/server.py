import logging

import uvicorn

from upload_relay.config import settings
from upload_relay.main import app

logger = logging.getLogger("upload_relay.server")


def main() -> None:
    logger.info("Upload relay listening on http://%s:%d", settings.host, settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except OSError as exc:
        logger.critical("Cannot bind %s:%d: %s", settings.host, settings.port, exc)
        raise SystemExit(1) from exc
    except SystemExit as exc:
        # uvicorn exits with status 1 when the listening socket cannot be bound.
        if exc.code:
            logger.critical("Cannot bind %s:%d", settings.host, settings.port)
        raise
