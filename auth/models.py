"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors posts/models.py
-- dataclasses own domain shape; stores and routes do the work.

Layer rule: no imports from api/, web/, or posts/.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
ROLES = (ROLE_ADMIN, ROLE_EDITOR)


@dataclass(frozen=True)
class Identity:
    """The authenticated requester, derived from a verified token.

    Lives for one request only and is never written to the database. The role
    is whatever the token says; it is not re-read from the users table.
    """

    id: int
    role: str  # "admin" | "editor"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass
class User:
    """A registered account.

    role is fixed at registration time; there is no operation that changes it.
    id is None before the record is written to the database.
    """

    username: str
    email: str
    password_hash: str
    role: str = ROLE_EDITOR
    id: int | None = None
    created_at: str | None = None

    def public(self) -> dict:
        """Return the fields safe to send to clients (no password hash)."""
        return {"id": self.id, "username": self.username, "email": self.email, "role": self.role}
