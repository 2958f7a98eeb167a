"""
api/routes/auth.py -- Registration, login and token validation endpoints.

Routes:
  POST /api/auth/register   -- create an account; 201 {message, userId}
  POST /api/auth/login      -- email/password login; 200 {token, user}
  GET  /api/auth/validate   -- current user record (requires auth)

Security:
  Login is rate-limited per IP (LOGIN_RATE_LIMIT, default 10/minute).
  authenticate_user() provides timing equalization -- use it, never inline.
  Unknown email and wrong password return the same 401 body.
  Cache-Control: no-store on login responses.

Registration accepts a client-supplied role (default editor). Nothing stops a
client from registering as admin; see DESIGN.md.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import (
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    ValidateResponse,
)
from auth.dependencies import get_current_identity
from auth.models import Identity, User
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, hash_password
from core.config import get_settings
from core.errors import Conflict, Forbidden, NotFound, Unauthenticated

logger = logging.getLogger("postdesk.api.auth")

# Auth policy:
# - POST /api/auth/register:  public
# - POST /api/auth/login:     public
# - GET  /api/auth/validate:  requires auth (get_current_identity)
router = APIRouter()


@limiter.limit("20/minute")
@router.post("/auth/register", response_model=RegisterResponse, status_code=201)
def register(request: Request, body: RegisterRequest) -> RegisterResponse:
    """Create a new account.

    Returns 400 when a field is missing or the username/email is taken.
    """
    if not get_settings().self_registration_enabled:
        raise Forbidden("Self-registration is disabled.")

    user_store: UserStore = request.app.state.user_store
    if user_store.exists(body.username, body.email):
        raise Conflict("Username or email already exists.")

    user_id = user_store.create_user(
        User(
            username=body.username,
            email=body.email,
            password_hash=hash_password(body.password),
            role=body.role.value,
        )
    )
    logger.info("Registered user %d (role=%s)", user_id, body.role.value)
    return RegisterResponse(user_id=user_id)


@limiter.limit(get_settings().login_rate_limit)
@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password and return a bearer token."""
    user_store: UserStore = request.app.state.user_store
    user = authenticate_user(user_store, body.email, body.password)
    if user is None:
        raise Unauthenticated("Invalid credentials.")

    token = create_access_token(Identity(id=user.id, role=user.role))
    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(token=token, user=PublicUser(**user.public())).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/auth/validate", response_model=ValidateResponse)
def validate(request: Request, identity: Identity = Depends(get_current_identity)) -> ValidateResponse:
    """Return the current user's public record.

    The token alone proves identity; the store lookup only supplies username
    and email. A valid token for a deleted user yields 404.
    """
    user_store: UserStore = request.app.state.user_store
    user = user_store.get_by_id(identity.id)
    if user is None:
        raise NotFound("User not found.")
    return ValidateResponse(user=PublicUser(**user.public()))
