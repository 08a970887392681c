"""HTTP middleware: bearer-token guard, request logging and security headers."""
import hmac
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class AuthOptions:
    """Options for the bearer-token guard. No secret means no auth."""
    secret: str | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.secret)


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """
    Require ``Authorization: Bearer <secret>`` on every request.

    Runs before routing, so unknown paths are rejected with 401 too.
    When no secret is configured every request passes through.
    """

    def __init__(self, app, options: AuthOptions):
        super().__init__(app)
        self.options = options

    def is_authorized(self, request: Request) -> bool:
        if not self.options.enabled:
            return True
        header = request.headers.get("authorization", "")
        expected = f"Bearer {self.options.secret}"
        return hmac.compare_digest(header.encode(), expected.encode())

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        if self.is_authorized(request):
            return await call_next(request)
        logger.warning(f"Rejected unauthenticated {request.method} {request.url.path}")
        return JSONResponse(status_code=401, content={"detail": "Unauthorized"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of each request."""

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms"
        )
        return response


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add standard security headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
