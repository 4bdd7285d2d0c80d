"""Path validation for title-addressed routes."""

import logging
import re
from typing import Awaitable, Callable, Iterable

from fastapi import HTTPException, Request
from fastapi.responses import Response

logger = logging.getLogger(__name__)

# Operation in group 1, title in group 2
VALID_PATH = re.compile(r"^/(edit|save|view)/([a-zA-Z0-9]+)$")

# Title routes are registered for every method so the path check runs first.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

TitleHandler = Callable[[Request, str], Awaitable[Response]]


def root_path(request: Request) -> str:
    """Prefix the app is mounted under, without a trailing slash."""
    return request.scope.get("root_path", "").rstrip("/")


def route_path(request: Request) -> str:
    """Request path relative to the app mount point."""
    path = request.scope["path"]
    prefix = root_path(request)
    if prefix and path.startswith(prefix + "/"):
        return path[len(prefix):]
    return path


def make_handler(
    handler: TitleHandler,
    methods: Iterable[str] = ("GET",),
) -> Callable[[Request], Awaitable[Response]]:
    """Wrap a ``(request, title)`` handler with path validation.

    The returned endpoint matches the request path against ``VALID_PATH``
    and answers 404 when it does not match, whatever the method. Only then
    is the method checked (405 if not in ``methods``), and the wrapped
    handler runs with the title already extracted, so handlers never parse
    the path themselves and only ever see an alphanumeric title.
    """
    allowed = frozenset(m.upper() for m in methods)
    if "GET" in allowed:
        allowed |= {"HEAD"}

    async def endpoint(request: Request) -> Response:
        path = route_path(request)
        match = VALID_PATH.fullmatch(path)
        if match is None:
            logger.debug("Rejected path %s", path)
            raise HTTPException(status_code=404, detail="Not Found")
        if request.method not in allowed:
            raise HTTPException(
                status_code=405,
                detail="Method Not Allowed",
                headers={"Allow": ", ".join(sorted(allowed))},
            )
        return await handler(request, match.group(2))

    # FastAPI reads the signature through __wrapped__, so functools.wraps is not used.
    endpoint.__name__ = handler.__name__
    endpoint.__doc__ = handler.__doc__
    return endpoint
