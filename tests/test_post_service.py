"""Unit tests for posts/service.py -- policy-gated post operations.

Covers:
- create() always stamps author_id from the identity; rejects empty fields
- NotFound is raised before any authorization check
- Forbidden on view/modify/delete without permission
- list() applies the policy filter at the store
- store failures collapse to InternalError
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from auth.models import Identity
from core.errors import Forbidden, InternalError, NotFound, ValidationError
from posts.service import PostService

ADMIN = Identity(id=1, role="admin")
E1 = Identity(id=7, role="editor")
E2 = Identity(id=8, role="editor")


@pytest.fixture
def service(post_store):
    return PostService(post_store)


class TestCreate:
    def test_author_is_requester(self, service):
        post = service.create(E1, title="A", content="x")
        assert post.author_id == 7
        assert post.status == "draft"
        assert post.id is not None

    def test_explicit_status(self, service):
        assert service.create(E1, title="A", content="x", status="published").status == "published"

    @pytest.mark.parametrize("title,content", [("", "x"), ("A", ""), ("   ", "x"), ("A", "  ")])
    def test_empty_fields_rejected(self, service, title, content):
        with pytest.raises(ValidationError):
            service.create(E1, title=title, content=content)

    def test_unknown_status_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create(E1, title="A", content="x", status="archived")


class TestGet:
    def test_missing_is_not_found(self, service):
        with pytest.raises(NotFound):
            service.get(ADMIN, 404)

    def test_draft_hidden_from_other_editor(self, service):
        post = service.create(E1, title="A", content="x")
        with pytest.raises(Forbidden):
            service.get(E2, post.id)

    def test_draft_visible_to_owner_and_admin(self, service):
        post = service.create(E1, title="A", content="x")
        assert service.get(E1, post.id).id == post.id
        assert service.get(ADMIN, post.id).id == post.id

    def test_published_visible_to_everyone(self, service):
        post = service.create(E1, title="A", content="x", status="published")
        assert service.get(E2, post.id).title == "A"


class TestUpdateDelete:
    def test_owner_can_update(self, service):
        post = service.create(E1, title="A", content="x")
        service.update(E1, post.id, title="B", content="y", status="published")
        updated = service.get(E2, post.id)
        assert (updated.title, updated.content, updated.status, updated.author_id) == ("B", "y", "published", 7)

    def test_admin_can_update_any(self, service):
        post = service.create(E1, title="A", content="x")
        service.update(ADMIN, post.id, title="Edited", content="x", status="draft")
        assert service.get(ADMIN, post.id).title == "Edited"
        assert service.get(ADMIN, post.id).author_id == 7

    def test_other_editor_cannot_update_published(self, service):
        post = service.create(E1, title="A", content="x", status="published")
        with pytest.raises(Forbidden):
            service.update(E2, post.id, title="B", content="y", status="published")

    def test_update_missing_is_not_found(self, service):
        with pytest.raises(NotFound):
            service.update(E1, 999, title="B", content="y", status="draft")

    def test_not_found_precedes_validation(self, service):
        with pytest.raises(NotFound):
            service.update(E1, 999, title="", content="", status="draft")

    def test_forbidden_precedes_validation(self, service):
        post = service.create(E1, title="A", content="x")
        with pytest.raises(Forbidden):
            service.update(E2, post.id, title="", content="", status="draft")

    def test_not_found_precedes_missing_status(self, service):
        with pytest.raises(NotFound):
            service.update(E1, 999, title="B", content="y", status=None)

    def test_forbidden_precedes_bad_status(self, service):
        post = service.create(E1, title="A", content="x", status="published")
        with pytest.raises(Forbidden):
            service.update(E2, post.id, title="B", content="y", status="bogus")

    @pytest.mark.parametrize("status", [None, "bogus"])
    def test_owner_update_with_bad_status_rejected(self, service, status):
        post = service.create(E1, title="A", content="x")
        with pytest.raises(ValidationError):
            service.update(E1, post.id, title="B", content="y", status=status)
        assert service.get(E1, post.id).title == "A"

    def test_title_too_long_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create(E1, title="t" * 256, content="x")
        assert service.create(E1, title="t" * 255, content="x").title == "t" * 255

    def test_update_with_empty_title_rejected(self, service):
        post = service.create(E1, title="A", content="x")
        with pytest.raises(ValidationError):
            service.update(E1, post.id, title="", content="y", status="draft")

    def test_delete_by_owner(self, service):
        post = service.create(E1, title="A", content="x")
        service.delete(E1, post.id)
        with pytest.raises(NotFound):
            service.get(E1, post.id)

    def test_delete_by_other_editor_forbidden(self, service):
        post = service.create(E1, title="A", content="x", status="published")
        with pytest.raises(Forbidden):
            service.delete(E2, post.id)

    def test_delete_by_admin(self, service):
        post = service.create(E1, title="A", content="x")
        service.delete(ADMIN, post.id)
        with pytest.raises(NotFound):
            service.get(ADMIN, post.id)

    @pytest.mark.parametrize("who", [ADMIN, E1])
    def test_delete_missing_is_not_found_for_any_role(self, service, who):
        with pytest.raises(NotFound):
            service.delete(who, 999)


class TestList:
    def test_editor_sees_published_and_own(self, service):
        mine = service.create(E1, title="mine", content="x")
        theirs_draft = service.create(E2, title="theirs", content="x")
        theirs_pub = service.create(E2, title="theirs pub", content="x", status="published")
        listed = {p.id for p in service.list(E1)}
        assert listed == {mine.id, theirs_pub.id}
        assert theirs_draft.id not in listed

    def test_admin_sees_all(self, service):
        a = service.create(E1, title="a", content="x")
        b = service.create(E2, title="b", content="x")
        assert [p.id for p in service.list(ADMIN)] == [b.id, a.id]


class TestStoreFailures:
    def test_store_error_becomes_internal_error(self):
        store = MagicMock()
        store.get_post.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with pytest.raises(InternalError):
            PostService(store).get(ADMIN, 1)

    def test_list_store_error_becomes_internal_error(self):
        store = MagicMock()
        store.list_posts.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with pytest.raises(InternalError):
            PostService(store).list(E1)
