"""Session-cookie auth gate for the CMS dashboard.

Sessions are issued by a Supabase (GoTrue) identity provider. Two cookie
conventions are accepted and neither is preferred:

- `sb-access-token`: raw access token, set by this app's login form
- `sb-auth-token` / `sb-<project-ref>-auth-token`: Supabase SSR session
  cookie, possibly base64-prefixed JSON and possibly split in `.0`, `.1` chunks

Decisions, per request to a non-API page:
- no identity provider configured: only `/` is redirected (to /login)
- `/dashboard*` without a verified user -> /login
- `/login` with a verified user -> /dashboard
- `/` -> /dashboard or /login
Any failure while deciding lets the request through, except `/`.
"""

from __future__ import annotations

import base64
import json
import re
from typing import Any, Awaitable, Callable, Mapping

import httpx
import structlog
from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from folio.config.app_config import AuthConfig

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_COOKIE = "sb-access-token"
AUTH_TOKEN_COOKIE = "sb-auth-token"

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"

_PASS_THROUGH_PREFIXES = ("/api", "/static", "/docs", "/redoc", "/openapi.json")
_STATIC_SUFFIX = re.compile(
    r"\.(ico|png|jpg|jpeg|gif|webp|svg|css|js|woff|woff2|ttf|eot)$", re.IGNORECASE
)
_CHUNK_SUFFIX = re.compile(r"\.(\d+)$")


class AuthError(Exception):
    """Raised when the identity provider rejects a sign-in."""


def is_auth_cookie_name(name: str) -> bool:
    """True for both session cookie conventions."""
    return name == ACCESS_TOKEN_COOKIE or ("sb-" in name and "auth-token" in name)


def has_auth_cookie(cookies: Mapping[str, str]) -> bool:
    return any(is_auth_cookie_name(name) for name in cookies)


def _decode_session_cookie(value: str) -> str | None:
    """Pull the access token out of a Supabase SSR session cookie value."""
    if value.startswith("base64-"):
        encoded = value[len("base64-"):]
        encoded += "=" * (-len(encoded) % 4)
        try:
            value = base64.urlsafe_b64decode(encoded).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            return None

    try:
        session = json.loads(value)
    except json.JSONDecodeError:
        # Plain token
        return value or None

    if isinstance(session, dict):
        return session.get("access_token")
    if isinstance(session, list) and session and isinstance(session[0], str):
        return session[0]
    if isinstance(session, str):
        return session or None
    return None


def extract_access_token(cookies: Mapping[str, str]) -> str | None:
    """Find an access token in either cookie convention."""
    token = cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token

    # Reassemble chunked cookies: name.0 + name.1 + ...
    sessions: dict[str, list[tuple[int, str]]] = {}
    for name, value in cookies.items():
        if name == ACCESS_TOKEN_COOKIE or not is_auth_cookie_name(name):
            continue
        match = _CHUNK_SUFFIX.search(name)
        base = name[: match.start()] if match else name
        index = int(match.group(1)) if match else 0
        sessions.setdefault(base, []).append((index, value))

    for base in sorted(sessions):
        value = "".join(part for _, part in sorted(sessions[base]))
        token = _decode_session_cookie(value)
        if token:
            return token

    return None


async def verify_access_token(token: str, auth: AuthConfig) -> dict[str, Any] | None:
    """Ask the identity provider who owns the token.

    Returns:
        The user object, or None when the token is rejected or the
        provider cannot be reached.
    """
    url = f"{auth.supabase_url.rstrip('/')}/auth/v1/user"
    headers = {"apikey": auth.supabase_anon_key, "Authorization": f"Bearer {token}"}

    try:
        async with httpx.AsyncClient(timeout=auth.timeout_seconds) as client:
            response = await client.get(url, headers=headers)
    except httpx.HTTPError as e:
        logger.warning("auth.verify_failed", error=str(e))
        return None

    if response.status_code != 200:
        logger.info("auth.token_rejected", status=response.status_code)
        return None

    try:
        user = response.json()
    except ValueError:
        logger.warning("auth.verify_bad_response")
        return None

    return user if isinstance(user, dict) and user.get("id") else None


async def sign_in_with_password(email: str, password: str, auth: AuthConfig) -> dict[str, Any]:
    """Exchange email/password for a session at the identity provider.

    Returns:
        Session dict with at least access_token and expires_in

    Raises:
        AuthError: If credentials are rejected or the provider is unreachable
    """
    url = f"{auth.supabase_url.rstrip('/')}/auth/v1/token"
    headers = {"apikey": auth.supabase_anon_key, "Content-Type": "application/json"}

    try:
        async with httpx.AsyncClient(timeout=auth.timeout_seconds) as client:
            response = await client.post(
                url,
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers=headers,
            )
    except httpx.HTTPError as e:
        logger.warning("auth.sign_in_unreachable", error=str(e))
        raise AuthError("Authentication service unavailable") from e

    if response.status_code != 200:
        logger.info("auth.sign_in_rejected", status=response.status_code)
        raise AuthError("Invalid email or password")

    session = response.json()
    if not session.get("access_token"):
        raise AuthError("Invalid email or password")

    logger.info("auth.signed_in", email=email)
    return session


def sanitize_user(user: dict[str, Any] | None) -> dict[str, str] | None:
    """Keep only what pages may show about the signed-in user."""
    if not user:
        return None

    email = user.get("email") or ""
    metadata = user.get("user_metadata") or {}
    return {"email": email, "name": metadata.get("name") or email.split("@")[0]}


def _is_dashboard(path: str) -> bool:
    return path.startswith(DASHBOARD_PATH)


def _redirect(target: str) -> RedirectResponse:
    return RedirectResponse(target)


async def _gate(request: Request) -> Response | None:
    """Return a redirect, or None to serve the request."""
    path = request.url.path
    auth: AuthConfig = request.app.state.config.auth

    if not auth.enabled:
        logger.warning("auth.not_configured", path=path)
        if path == "/":
            return _redirect(LOGIN_PATH)
        return None

    if not has_auth_cookie(request.cookies):
        if _is_dashboard(path) or path == "/":
            return _redirect(LOGIN_PATH)
        return None

    user = None
    token = extract_access_token(request.cookies)
    if token:
        user = await verify_access_token(token, auth)
    request.state.user = sanitize_user(user)

    if _is_dashboard(path) and user is None:
        return _redirect(LOGIN_PATH)
    if path == LOGIN_PATH and user is not None:
        return _redirect(DASHBOARD_PATH)
    if path == "/":
        return _redirect(DASHBOARD_PATH if user is not None else LOGIN_PATH)

    return None


async def auth_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Gate dashboard pages behind a verified session."""
    path = request.url.path
    request.state.user = None

    if path.startswith(_PASS_THROUGH_PREFIXES) or _STATIC_SUFFIX.search(path):
        return await call_next(request)

    try:
        decision = await _gate(request)
    except Exception:
        # Fail open, but never serve the bare root
        logger.exception("auth.middleware_error", path=path)
        decision = _redirect(LOGIN_PATH) if path == "/" else None

    if decision is not None:
        return decision

    return await call_next(request)
