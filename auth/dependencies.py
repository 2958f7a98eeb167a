"""
auth/dependencies.py -- Access Guard: FastAPI Depends() helpers for authentication.

Only one auth method is accepted: an `Authorization: Bearer <token>` header.
authenticate_bearer() is the plain guard function (header value in, Identity
out, Unauthenticated raised on failure). get_current_identity() adapts it to
FastAPI's dependency injection so routers compose it explicitly:

    router = APIRouter(dependencies=[Depends(get_current_identity)])

The guard runs before the handler body, so a rejected request never reaches
any handler logic. No database lookup happens here; the Identity is exactly
what the verified token carries.

Layer rule: no imports from web/ or posts/.
"""

from __future__ import annotations

import logging

from fastapi import Request

from auth.models import Identity
from auth.tokens import InvalidToken, verify_access_token
from core.errors import Unauthenticated

logger = logging.getLogger("postdesk.auth")

_SCHEME = "Bearer "


def authenticate_bearer(header_value: str | None) -> Identity:
    """Return the Identity carried by an Authorization header value.

    Raises Unauthenticated if the header is absent, does not use the Bearer
    scheme, or the token fails verification.
    """
    if not header_value:
        raise Unauthenticated("No token provided.")
    if not header_value.startswith(_SCHEME):
        raise Unauthenticated("No token provided.")
    token = header_value[len(_SCHEME) :].strip()
    if not token:
        raise Unauthenticated("No token provided.")
    try:
        return verify_access_token(token)
    except InvalidToken as exc:
        logger.info("Rejected bearer token (%s)", exc)
        raise Unauthenticated("Invalid token.") from exc


def get_current_identity(request: Request) -> Identity:
    """Require authentication. Raises Unauthenticated (HTTP 401) if the request has no valid token.

    The Identity is also bound to request.state.identity for code that only
    has the request object (e.g. logging middleware).

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(identity: Identity = Depends(get_current_identity)): ...
    """
    identity = authenticate_bearer(request.headers.get("Authorization"))
    request.state.identity = identity
    return identity
