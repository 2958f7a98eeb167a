"""
auth/tokens.py -- Token Service: JWT issue/verify and password hashing.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with SECRET_KEY and carry
       user_id, role, and expiry. Verification is self-contained: it never
       touches the database, so a token stays valid until it expires. There
       is no revocation list.

  verify_access_token() raises InvalidToken on any failure (bad signature,
       malformed payload, expired). The Access Guard in auth/dependencies.py
       turns that into a 401.

  Passwords: bcrypt directly (no passlib wrapper). The _DUMMY_HASH constant
       enables timing equalization in authenticate_user() so response time
       does not reveal whether an email is registered.

Layer rule: no imports from api/, web/, or posts/. Import from core/ is
allowed -- core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from auth.models import ROLES, Identity
from core.config import get_settings

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("postdesk.auth")

_settings = get_settings()

_ALGORITHM = "HS256"


class InvalidToken(Exception):
    """Raised when a token fails signature, payload, or expiry checks."""


# ---------------------------------------------------------------------------
# Password hashing (bcrypt)
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    bcrypt raises ValueError for input over 72 bytes (UTF-8 encoded); the
    API layer rejects such passwords with 400 before they get here.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# Computed once at module load so the first login attempt is not measurably
# slower than subsequent ones.
_DUMMY_HASH: str = hash_password("postdesk_timing_dummy")


# ---------------------------------------------------------------------------
# JWT issue / verify
# ---------------------------------------------------------------------------


def create_access_token(identity: Identity, issued_at: datetime | None = None) -> str:
    """Issue a signed token for identity, expiring TOKEN_EXPIRE_SECONDS after issued_at.

    Args:
        identity:  The user id and role to embed.
        issued_at: Issuance time; defaults to now (UTC). Exposed so callers
                   and tests can pin the expiry window.
    """
    # JWT time claims are whole seconds
    issued_at = (issued_at or datetime.now(timezone.utc)).replace(microsecond=0)
    expire = issued_at + timedelta(seconds=_settings.token_expire_seconds)
    payload = {
        "sub": str(identity.id),
        "user_id": identity.id,
        "role": identity.role,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(payload, _settings.secret_key, algorithm=_ALGORITHM)


def verify_access_token(token: str, now: datetime | None = None) -> Identity:
    """Verify token and return the Identity it carries.

    Raises InvalidToken when the signature does not match, the payload is
    malformed, or the expiry has passed. A token is expired from the exact
    second of its exp claim onwards, so the expiry check is done here rather
    than by jose (which accepts now == exp).
    """
    now = now or datetime.now(timezone.utc)
    try:
        payload = jwt.decode(
            token,
            _settings.secret_key,
            algorithms=[_ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError as exc:
        raise InvalidToken("token_invalid") from exc

    exp = payload.get("exp")
    if not isinstance(exp, int):
        raise InvalidToken("token_malformed")
    if now.timestamp() >= exp:
        raise InvalidToken("token_expired")

    user_id = payload.get("user_id")
    role = payload.get("role")
    # bool is an int subclass; reject it explicitly
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidToken("token_malformed")
    if role not in ROLES:
        raise InvalidToken("token_malformed")
    return Identity(id=user_id, role=role)


# ---------------------------------------------------------------------------
# User authentication (constant-time)
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, email: str, password: str) -> User | None:
    """Authenticate an email/password login with timing equalization.

    Always runs bcrypt whether or not the email exists:
    - Unknown email: bcrypt runs against _DUMMY_HASH (same cost as real check)
    - Wrong password: bcrypt runs against the real hash

    Returns the User on success, None on any failure.
    """
    user = store.get_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
