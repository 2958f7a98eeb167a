"""
auth/store.py -- SQLAlchemy Core persistence layer for user accounts.

Pattern: Repository + Data Mapper (same as posts/store.py).
UserStore is the repository; _row_to_user is the mapper. Route code never
touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.
  Usernames and emails are UNIQUE at the schema level; create_user() surfaces
  a violation as core.errors.Conflict.

Layer rule: no imports from api/, web/, or posts/.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.models import User
from core.config import get_settings
from core.database import create_db_engine, users
from core.errors import Conflict


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore()
        uid = store.create_user(User(username="ana", email="ana@example.com", password_hash=hash_password("pw")))
        user = store.get_by_email("ana@example.com")
        store.close()
    """

    def __init__(self, db_url: str | None = None) -> None:
        self.engine: Engine = create_db_engine(db_url or get_settings().database_url)

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            conn.execute(select(1))
        return True

    def has_users(self) -> bool:
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(users)).scalar()
        return (result or 0) > 0

    def exists(self, username: str, email: str) -> bool:
        """Return True if either the username or the email is already registered."""
        with self.engine.connect() as conn:
            row = conn.execute(
                select(users.c.id).where(or_(users.c.username == username, users.c.email == email)).limit(1)
            ).fetchone()
        return row is not None

    def create_user(self, user: User) -> int:
        """Insert a new user and return its assigned database ID.

        Raises Conflict if the username or email is already taken. The UNIQUE
        constraints catch the race where two registrations pass exists() at
        the same time.
        """
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    users.insert().values(
                        username=user.username,
                        email=user.email,
                        password_hash=user.password_hash,
                        role=user.role,
                        created_at=_now_iso(),
                    )
                )
                conn.commit()
        except IntegrityError as exc:
            raise Conflict("Username or email already exists.") from exc
        return result.inserted_primary_key[0]

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(users.select().where(users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_id(self, user_id: int) -> User | None:
        with self.engine.connect() as conn:
            row = conn.execute(users.select().where(users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def close(self) -> None:
        self.engine.dispose()


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        role=row.role,
        created_at=row.created_at,
    )
