"""
Request logging middleware: one line per request, traceback on unhandled errors
"""
import logging
import time
import traceback

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger("subtracker.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.error(
                "%s %s -> 500 (%.2f ms)\n%s",
                request.method, request.url.path, duration_ms, traceback.format_exc(),
            )
            return JSONResponse({"detail": "Internal Server Error"}, status_code=500)

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "%s %s -> %d (%.2f ms)",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response
