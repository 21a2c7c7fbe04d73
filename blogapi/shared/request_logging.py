"""Logging setup and request logging for API-tjenester."""

import logging
import sys
import time

from fastapi import FastAPI, Request
from fastapi.responses import Response

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Send the blogapi logger tree to stderr at the given level.

    uvicorn only configures its own loggers, so without a handler here
    everything below WARNING would be dropped.
    """
    app_logger = logging.getLogger("blogapi")
    app_logger.setLevel(level.upper())
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)
    return app_logger


def setup_request_logging(app: FastAPI) -> None:
    """Log method, path, status and duration of every request."""

    @app.middleware("http")
    async def log_request(request: Request, call_next) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response
