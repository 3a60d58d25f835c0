import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from zuhri.core.config import settings

logger = logging.getLogger(__name__)

QUIET_PATHS = {f"{settings.API_PREFIX}/health"}


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _context(request: Request, request_id: str) -> dict:
    """Fields attached to every request log line; user_id is set once auth has run."""
    return {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "user_id": getattr(request.state, "user_id", None),
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            extra = _context(request, request_id)
            extra.update(duration_ms=_elapsed_ms(started), error=str(exc))
            logger.error(f"[{request_id}] {request.method} {request.url.path} - ERROR", extra=extra)
            raise

        extra = _context(request, request_id)
        extra.update(
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            cache_status=getattr(request.state, "cache_status", None),
        )
        user_msg = f" user={extra['user_id']}" if extra["user_id"] else ""
        cache_msg = f" [CACHE: {extra['cache_status']}]" if extra["cache_status"] else ""

        if response.status_code >= 400:
            level = logging.WARNING
        elif request.url.path in QUIET_PATHS:
            level = logging.DEBUG
        else:
            level = logging.INFO
        logger.log(
            level,
            f"[{request_id}] {request.method} {request.url.path} - {response.status_code}"
            f"{user_msg}{cache_msg} ({extra['duration_ms']}ms)",
            extra=extra,
        )

        response.headers["X-Request-ID"] = request_id
        return response
