"""Error handlers and the JSON response envelope.

Every response body has the shape
``{"success": bool, "data"?: ..., "message"?: str, "error"?: str, "count"?: int}``.
"""

import logging
import re
from typing import Any

import falcon
import falcon.asgi

from docshare.domain.exceptions import (
    AuthenticationFailed,
    DependencyError,
    DocShareError,
    NotFound,
    PermissionDenied,
)

logger = logging.getLogger(__name__)

_STATUS_PREFIX = re.compile(r"^\d{3}\s+")

# Ordered most specific first; anything else derived from DocShareError is a 400.
_STATUS_BY_CLASS: list[tuple[type[DocShareError], str]] = [
    (AuthenticationFailed, falcon.HTTP_401),
    (PermissionDenied, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (DependencyError, falcon.HTTP_500),
]


def status_for(ex: DocShareError) -> str:
    """Map a domain exception to an HTTP status line."""
    for cls, status in _STATUS_BY_CLASS:
        if isinstance(ex, cls):
            return status
    if type(ex) is DocShareError:
        return falcon.HTTP_500
    return falcon.HTTP_400


def envelope(
    data: Any = None,
    *,
    success: bool = True,
    message: str | None = None,
    error: str | None = None,
    count: int | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success}
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if error is not None:
        body["error"] = error
    return body


def respond(
    resp: falcon.asgi.Response,
    data: Any = None,
    *,
    status: str = falcon.HTTP_200,
    message: str | None = None,
    count: int | None = None,
) -> None:
    """Write a success envelope."""
    resp.status = status
    resp.media = envelope(data, message=message, count=count)


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: DocShareError, params: dict
) -> None:
    status = status_for(ex)
    if status == falcon.HTTP_500:
        logger.error("%s %s failed: %s (%s)", req.method, req.path, ex.message, ex.code)
    resp.status = status
    resp.media = envelope(success=False, message=ex.message, error=ex.code)


async def handle_http_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: falcon.HTTPError, params: dict
) -> None:
    """Falcon's own errors (unknown route, bad media) in the same envelope."""
    resp.status = ex.status
    if ex.headers:
        resp.set_headers(ex.headers)
    message = ex.description or ex.title
    # Falcon titles carry the status line, e.g. "404 Not Found".
    title = _STATUS_PREFIX.sub("", ex.title or "") or "error"
    code = title.upper().replace(" ", "_")
    resp.media = envelope(success=False, message=message, error=code)


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = envelope(success=False, message="Server error", error="INTERNAL_ERROR")


def register_error_handlers(app: falcon.asgi.App) -> None:
    # Falcon resolves handlers by MRO, so the more specific ones win.
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(falcon.HTTPError, handle_http_error)
    app.add_error_handler(DocShareError, handle_domain_error)
