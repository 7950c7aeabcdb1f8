"""Middleware: request tracing and page response headers."""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hydration.config import get_settings
from hydration.services.locale import resolve_locale

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log one line per hydrated page.

    The ID comes from ``X-Request-ID`` when the caller sends one. Only HTML
    responses are logged, since each page render may query the CMS.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        started = time.perf_counter()

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        if _is_html(response):
            logger.info(
                "[%s] %s %s -> %d in %.0f ms",
                rid,
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
        return response


class PageHeadersMiddleware(BaseHTTPMiddleware):
    """Security headers on every response, plus framing and language on pages.

    Pages may be framed by the site itself only. ``Content-Language`` follows
    the same ``/cs/`` rule that picks the locale a page is hydrated with.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if _is_html(response):
            response.headers["X-Frame-Options"] = "SAMEORIGIN"
            response.headers["Content-Language"] = resolve_locale(
                request.url.path, get_settings()
            )
        return response


def _is_html(response: Response) -> bool:
    return response.headers.get("content-type", "").startswith("text/html")
