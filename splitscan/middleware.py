import logging
import secrets
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("splitscan")

CTK_COOKIE_NAME = "ctk"
CTK_MAX_AGE = 60 * 60 * 24 * 30  # 30 days

SKIP_LOG_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}
LOCAL_HOSTS = ("localhost", "127.0.0.1", "testserver")


class SessionMiddleware(BaseHTTPMiddleware):
    """Assigns a cookie tracking key (ctk) that identifies the scan session."""

    async def dispatch(self, request: Request, call_next) -> Response:
        # Skip CTK processing for CORS preflight requests
        if request.method == "OPTIONS":
            return await call_next(request)

        ctk = request.cookies.get(CTK_COOKIE_NAME)
        new_ctk = False

        if not ctk:
            ctk = secrets.token_urlsafe(24)
            new_ctk = True

        request.state.ctk = ctk

        response: Response = await call_next(request)

        if new_ctk:
            response.set_cookie(
                key=CTK_COOKIE_NAME,
                value=ctk,
                max_age=CTK_MAX_AGE,
                httponly=True,
                samesite="lax",
                secure=request.url.hostname not in LOCAL_HOSTS,
                path="/api",
            )

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code, duration, and ctk for each request.

    Upstream failures (5xx) are logged at WARNING so they stand out from
    routine scans.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)

        path = request.url.path
        if path in SKIP_LOG_PATHS:
            return response

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} {response.status_code}",
            extra={"extra_data": {
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000),
                "ctk": getattr(request.state, "ctk", None),
            }},
        )
        return response
