"""structlog setup and per-request access logging.

Application modules keep using ``logging.getLogger(__name__)``; their records
are rendered by the same structlog processor chain as native structlog events.
"""

import logging
import sys
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from lms_api.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

# Libraries whose INFO output duplicates the access log
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging() -> None:
    """Route structlog and stdlib logging through one stdout handler.

    DEBUG switches to the console renderer and lowers the root level.
    """
    shared = _shared_processors()
    renderer: Any = (
        structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one ``http`` record per request, including requests that crash.

    The request id, method and path are bound to the structlog context, so
    anything logged while handling the request carries them too.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger = structlog.get_logger("http")
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        client = request.client.host if request.client else "unknown"
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            # The exception handler renders the 500 further out
            await logger.aerror(
                "request",
                status=500,
                duration_ms=_elapsed_ms(start),
                client=client,
                error=f"{type(exc).__name__}: {exc}",
            )
            raise

        await logger.ainfo(
            "request",
            status=response.status_code,
            duration_ms=_elapsed_ms(start),
            client=client,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
