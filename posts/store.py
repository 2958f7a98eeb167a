"""
posts/store.py -- SQLAlchemy-backed persistence layer for posts.

Uses SQLAlchemy Core (not ORM) so the dataclass in posts/models.py remains the
authoritative domain representation. Swapping SQLite for PostgreSQL or MySQL
is a connection string change.

Pattern: Repository + Data Mapper. PostStore is the repository; _row_to_post
is the mapper. The store does no authorization of its own: posts/service.py
asks posts/policy.py first and then calls in here. Each method runs a single
statement on its own connection; there are no multi-statement transactions.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = PostStore()
    post_id = store.create_post(Post(title="Hello", content="...", author_id=1))
    store.list_posts(ListFilter(restricted=True, owner_id=1))
    store.close()
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.engine import Engine

from core.config import get_settings
from core.database import create_db_engine, posts, users
from posts.models import STATUS_PUBLISHED, Post
from posts.policy import ListFilter

# posts LEFT JOIN users, so author_name comes back with every read
_joined = posts.outerjoin(users, posts.c.author_id == users.c.id)
_select_posts = select(posts, users.c.username.label("author_name")).select_from(_joined)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class PostStore:
    def __init__(self, db_url: Optional[str] = None) -> None:
        self.engine: Engine = create_db_engine(db_url or get_settings().database_url)

    def create_post(self, post: Post) -> int:
        """Insert a post and return its ID. created_at is always set here."""
        with self.engine.connect() as conn:
            result = conn.execute(
                posts.insert().values(
                    title=post.title,
                    content=post.content,
                    status=post.status,
                    author_id=post.author_id,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_post(self, post_id: int) -> Optional[Post]:
        """Return the post with author_name filled in, or None if it does not exist."""
        with self.engine.connect() as conn:
            row = conn.execute(_select_posts.where(posts.c.id == post_id)).fetchone()
        return _row_to_post(row) if row is not None else None

    def list_posts(self, flt: ListFilter) -> list[Post]:
        """Return posts matching flt, newest first.

        Unrestricted filters list everything. Restricted filters list
        published posts plus the owner's own posts in any status.
        """
        query = _select_posts
        if flt.restricted:
            query = query.where(or_(posts.c.status == STATUS_PUBLISHED, posts.c.author_id == flt.owner_id))
        # id breaks ties between posts created within the same microsecond
        query = query.order_by(posts.c.created_at.desc(), posts.c.id.desc())
        with self.engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_post(r) for r in rows]

    def update_post(self, post_id: int, title: str, content: str, status: str) -> bool:
        """Overwrite title, content and status. author_id is never touched.

        Returns True if a row was updated, False if post_id was not found.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                posts.update().where(posts.c.id == post_id).values(title=title, content=content, status=status)
            )
            conn.commit()
        return result.rowcount > 0

    def delete_post(self, post_id: int) -> bool:
        """Delete a post. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(posts.delete().where(posts.c.id == post_id))
            conn.commit()
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


def _row_to_post(row) -> Post:
    return Post(
        id=row.id,
        title=row.title,
        content=row.content,
        status=row.status,
        author_id=row.author_id,
        created_at=row.created_at,
        author_name=row.author_name,
    )
