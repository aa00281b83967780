"""CORS headers for the JSON API.

The request Origin is echoed back only when it is allow-listed;
otherwise the first allow-listed origin is returned.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"
MAX_AGE = "86400"


def cors_headers(origin: str | None, allowed_origins: list[str]) -> dict[str, str]:
    """Compute CORS headers for a request origin."""
    if origin and origin in allowed_origins:
        allow_origin = origin
    else:
        allow_origin = allowed_origins[0] if allowed_origins else "*"

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Max-Age": MAX_AGE,
        "Vary": "Origin",
    }


async def cors_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Answer preflight requests and decorate /api responses."""
    if not request.url.path.startswith("/api"):
        return await call_next(request)

    headers = cors_headers(
        request.headers.get("origin"), request.app.state.config.allowed_origins
    )

    if request.method == "OPTIONS":
        return JSONResponse({}, headers=headers)

    response = await call_next(request)
    response.headers.update(headers)
    return response
