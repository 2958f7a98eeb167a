"""Unit tests for posts/policy.py -- the authorization decisions.

Covers:
- can_view() matches admin OR published OR owner for every combination
- can_modify() matches admin OR owner for every combination
- can_modify() implies can_view()
- list_filter() is unrestricted for admins and owner-scoped for editors
"""

from itertools import product

import pytest

from auth.models import Identity
from posts.models import Post
from posts.policy import ListFilter, can_modify, can_view, list_filter

_CASES = list(product(["admin", "editor"], ["draft", "published"], [True, False]))


def _post(status: str, author_id: int) -> Post:
    return Post(id=1, title="t", content="c", status=status, author_id=author_id)


@pytest.mark.parametrize("role,status,owned", _CASES)
def test_can_view_matches_rule(role, status, owned):
    requester = Identity(id=7, role=role)
    post = _post(status, author_id=7 if owned else 8)
    expected = role == "admin" or status == "published" or owned
    assert can_view(requester, post) is expected


@pytest.mark.parametrize("role,status,owned", _CASES)
def test_can_modify_matches_rule(role, status, owned):
    requester = Identity(id=7, role=role)
    post = _post(status, author_id=7 if owned else 8)
    expected = role == "admin" or owned
    assert can_modify(requester, post) is expected


@pytest.mark.parametrize("role,status,owned", _CASES)
def test_modify_implies_view(role, status, owned):
    requester = Identity(id=7, role=role)
    post = _post(status, author_id=7 if owned else 8)
    if can_modify(requester, post):
        assert can_view(requester, post)


def test_published_post_by_someone_else_is_visible_but_not_editable():
    editor = Identity(id=2, role="editor")
    post = _post("published", author_id=1)
    assert can_view(editor, post)
    assert not can_modify(editor, post)


def test_list_filter_admin_unrestricted():
    assert list_filter(Identity(id=1, role="admin")) == ListFilter(restricted=False, owner_id=None)


def test_list_filter_editor_restricted_to_self():
    assert list_filter(Identity(id=42, role="editor")) == ListFilter(restricted=True, owner_id=42)
