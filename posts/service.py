"""
posts/service.py -- Post operations gated by the authorization policy.

Every operation takes the requester Identity first. The order of checks is
fixed:

  1. existence  -- a missing id raises NotFound before any policy check
  2. policy     -- can_view / can_modify, Forbidden on denial
  3. input      -- empty title/content raises ValidationError

Any SQLAlchemy failure inside an operation is logged and re-raised as
InternalError; callers never see driver-specific exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from auth.models import Identity
from core.errors import Forbidden, InternalError, NotFound, ValidationError
from posts.models import MAX_TITLE_LENGTH, STATUS_DRAFT, STATUSES, Post
from posts.policy import can_modify, can_view, list_filter
from posts.store import PostStore

logger = logging.getLogger("postdesk.posts")


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store failure during %s: %s", operation, exc)
        raise InternalError(f"Error during {operation}.") from exc


def _check_fields(title: str | None, content: str | None, status: str | None) -> None:
    if not title or not title.strip() or not content or not content.strip():
        raise ValidationError("Title and content are required.")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters.")
    if status not in STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(STATUSES)}.")


class PostService:
    """CRUD over posts for one store, applying posts.policy before each read or write."""

    def __init__(self, store: PostStore) -> None:
        self.store = store

    def _load(self, post_id: int) -> Post:
        with _store_errors("fetching post"):
            post = self.store.get_post(post_id)
        if post is None:
            raise NotFound("Post not found.")
        return post

    def create(self, identity: Identity, title: str, content: str, status: str = STATUS_DRAFT) -> Post:
        """Create a post owned by identity.

        author_id always comes from the identity; there is no parameter for it.
        """
        _check_fields(title, content, status)
        with _store_errors("creating post"):
            post_id = self.store.create_post(
                Post(title=title, content=content, status=status, author_id=identity.id)
            )
            created = self.store.get_post(post_id)
        if created is None:
            raise InternalError("Post not found after write.")
        logger.info("Post %d created by user %d", post_id, identity.id)
        return created

    def get(self, identity: Identity, post_id: int) -> Post:
        post = self._load(post_id)
        if not can_view(identity, post):
            logger.warning("User %d denied read of post %d", identity.id, post_id)
            raise Forbidden("Access denied.")
        return post

    def list(self, identity: Identity) -> list[Post]:
        """Return the posts identity may view, newest first."""
        with _store_errors("listing posts"):
            return self.store.list_posts(list_filter(identity))

    def update(self, identity: Identity, post_id: int, title: str, content: str, status: str | None) -> None:
        post = self._load(post_id)
        if not can_modify(identity, post):
            logger.warning("User %d denied update of post %d", identity.id, post_id)
            raise Forbidden("Access denied.")
        _check_fields(title, content, status)
        with _store_errors("updating post"):
            updated = self.store.update_post(post_id, title=title, content=content, status=status)
        if not updated:
            # Deleted between the lookup and the update
            raise NotFound("Post not found.")
        logger.info("Post %d updated by user %d", post_id, identity.id)

    def delete(self, identity: Identity, post_id: int) -> None:
        post = self._load(post_id)
        if not can_modify(identity, post):
            logger.warning("User %d denied delete of post %d", identity.id, post_id)
            raise Forbidden("Access denied.")
        with _store_errors("deleting post"):
            deleted = self.store.delete_post(post_id)
        if not deleted:
            raise NotFound("Post not found.")
        logger.info("Post %d deleted by user %d", post_id, identity.id)
