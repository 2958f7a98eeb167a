"""
posts/policy.py -- Authorization Policy for posts.

Pure decision functions: no I/O, no framework imports. Given a requester
Identity and a Post (or only the Identity, for listing), decide what the
requester may do.

  view    -- admin, or the post is published, or the requester owns it
  modify  -- admin, or the requester owns it (also governs delete)

modify is strictly narrower than view: a published post written by someone
else is readable but not editable.

list_filter() decides which predicate the store applies when listing, so rows
the requester may not see are never fetched.
"""

from __future__ import annotations

from dataclasses import dataclass

from auth.models import Identity
from posts.models import STATUS_PUBLISHED, Post


@dataclass(frozen=True)
class ListFilter:
    """Query-boundary restriction for listing posts.

    restricted=False: no WHERE clause, every post is listed.
    restricted=True:  list rows with status = 'published' OR author_id = owner_id.
    """

    restricted: bool
    owner_id: int | None = None


def can_view(identity: Identity, post: Post) -> bool:
    return identity.is_admin or post.status == STATUS_PUBLISHED or post.author_id == identity.id


def can_modify(identity: Identity, post: Post) -> bool:
    return identity.is_admin or post.author_id == identity.id


def list_filter(identity: Identity) -> ListFilter:
    if identity.is_admin:
        return ListFilter(restricted=False)
    return ListFilter(restricted=True, owner_id=identity.id)
