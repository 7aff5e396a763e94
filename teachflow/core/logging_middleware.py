import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log line per request, tagged with the verified caller when there is one."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start
        # set by the authenticate gate on protected routes
        identity = getattr(request.state, "identity", None)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s -> %s (%.2fs) caller=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            identity.email if identity is not None else "-",
        )

        return response
