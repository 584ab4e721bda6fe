"""
==============================================================================
Admin Access Gate Module
==============================================================================

HTTP Basic Auth in front of the admin path prefix.

Decision Table:
--------------
    path outside prefix                 → pass through
    ADMIN_USER or ADMIN_PASS unset      → 500, every admin request
    header missing / not "Basic ..."    → 401 + WWW-Authenticate
    undecodable or wrong credentials    → 401 + WWW-Authenticate
    credentials match                   → pass through

Credentials are read from settings on every request, so rotating the
environment and clearing the settings cache takes effect immediately.

==============================================================================
"""

from __future__ import annotations

import base64
import binascii
import logging
import secrets
from typing import Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from fimenu.config import Settings, get_settings
from fimenu.core import exceptions


# Module logger
logger = logging.getLogger(__name__)

WWW_AUTHENTICATE = 'Basic realm="Admin Area", charset="UTF-8"'


def parse_basic_credentials(authorization: Optional[str]) -> Optional[tuple]:
    """
    Split an ``Authorization: Basic`` header into (username, password).

    Parsed here rather than with ``fastapi.security.HTTPBasic``, which
    decodes credentials as ASCII; admin credentials are UTF-8.

    Args:
        authorization: Raw header value

    Returns:
        Tuple of (username, password), or None when the header is absent
        or malformed
    """
    if not authorization:
        return None

    scheme, _, encoded = authorization.partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        return None

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None

    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def credentials_match(
    authorization: Optional[str],
    username: str,
    password: str
) -> bool:
    """Constant-time check of a Basic header against the configured pair."""
    credentials = parse_basic_credentials(authorization)
    if credentials is None:
        return False

    given_user, given_pass = credentials
    user_ok = secrets.compare_digest(given_user.encode("utf-8"), username.encode("utf-8"))
    pass_ok = secrets.compare_digest(given_pass.encode("utf-8"), password.encode("utf-8"))
    return user_ok and pass_ok


def is_admin_path(path: str, prefix: str) -> bool:
    """True for the prefix itself and anything below it."""
    return path == prefix or path.startswith(prefix + "/")


class AdminAccessGate(BaseHTTPMiddleware):
    """
    Middleware enforcing HTTP Basic credentials on the admin prefix.

    Example:
        >>> app.add_middleware(AdminAccessGate)
    """

    def __init__(
        self,
        app,
        settings_provider: Callable[[], Settings] = get_settings
    ) -> None:
        super().__init__(app)
        self._settings_provider = settings_provider

    async def dispatch(self, request: Request, call_next):
        settings = self._settings_provider()

        if not is_admin_path(request.url.path, settings.admin_path_prefix):
            return await call_next(request)

        if not settings.admin_configured:
            logger.warning("⚠️ Admin request blocked: ADMIN_USER/ADMIN_PASS not set")
            exc = exceptions.admin_auth_not_configured()
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        authorization = request.headers.get("authorization")
        if credentials_match(authorization, settings.admin_user, settings.admin_pass):
            return await call_next(request)

        logger.info(f"Admin request rejected: {request.method} {request.url.path}")
        exc = exceptions.unauthorized()
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"WWW-Authenticate": WWW_AUTHENTICATE},
        )
