"""
posts/models.py -- Domain dataclasses for the posts resource.

Pure data containers with zero logic. Access decisions live in
posts/policy.py; persistence in posts/store.py.
"""

from dataclasses import dataclass
from typing import Optional

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"
STATUSES = (STATUS_DRAFT, STATUS_PUBLISHED)

# Matches the posts.title column width.
MAX_TITLE_LENGTH = 255


@dataclass
class Post:
    """A piece of content owned by exactly one user.

    author_id is set once on insert and never changes. author_name is a
    read-only projection joined from users; it is None on freshly built
    instances that have not been read back from the store.

    id is None before the record is written to the database.
    """

    title: str
    content: str
    author_id: int
    status: str = STATUS_DRAFT  # "draft" | "published"
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    author_name: Optional[str] = None
