"""
api/routes/posts.py -- Posts CRUD routes.

Routes:
  GET    /api/posts        -- posts visible to the requester, newest first
  GET    /api/posts/{id}   -- single post (404, then 403)
  POST   /api/posts        -- create; author is always the requester
  PUT    /api/posts/{id}   -- overwrite title/content/status (404, then 403)
  DELETE /api/posts/{id}   -- delete (404, then 403)

Every route requires a bearer token. The Access Guard is a router-level
dependency, so it runs before any handler body. Authorization decisions are
made by PostService via posts/policy.py, not here.
"""

from fastapi import APIRouter, Depends, Request

from api.limiter import limiter
from api.models import MessageResponse, PostCreate, PostResponse, PostUpdate
from auth.dependencies import get_current_identity
from auth.models import Identity
from posts.service import PostService

router = APIRouter(dependencies=[Depends(get_current_identity)])


def _service(request: Request) -> PostService:
    return request.app.state.post_service


@limiter.limit("60/minute")
@router.get("/posts", response_model=list[PostResponse])
def list_posts(request: Request, identity: Identity = Depends(get_current_identity)) -> list[PostResponse]:
    """Admins see every post; editors see published posts plus their own drafts."""
    return [PostResponse.from_post(p) for p in _service(request).list(identity)]


@limiter.limit("60/minute")
@router.get("/posts/{post_id}", response_model=PostResponse)
def get_post(request: Request, post_id: int, identity: Identity = Depends(get_current_identity)) -> PostResponse:
    return PostResponse.from_post(_service(request).get(identity, post_id))


@limiter.limit("30/minute")
@router.post("/posts", response_model=PostResponse, status_code=201)
def create_post(
    request: Request,
    body: PostCreate,
    identity: Identity = Depends(get_current_identity),
) -> PostResponse:
    """Create a post. Status defaults to draft."""
    post = _service(request).create(identity, title=body.title, content=body.content, status=body.status)
    return PostResponse.from_post(post)


@limiter.limit("30/minute")
@router.put("/posts/{post_id}", response_model=MessageResponse)
def update_post(
    request: Request,
    post_id: int,
    body: PostUpdate,
    identity: Identity = Depends(get_current_identity),
) -> MessageResponse:
    _service(request).update(
        identity, post_id, title=body.title, content=body.content, status=body.status
    )
    return MessageResponse(message="Post updated successfully")


@limiter.limit("30/minute")
@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(request: Request, post_id: int, identity: Identity = Depends(get_current_identity)) -> MessageResponse:
    _service(request).delete(identity, post_id)
    return MessageResponse(message="Post deleted successfully")
