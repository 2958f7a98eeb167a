"""
API request and response models for Postdesk REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
posts/models.py, which own the internal domain representation. Route handlers
map between the two.

Post bodies are only shape-checked here. Field values (empty title, unknown
status) are validated by PostService after the existence and permission
checks, so PUT on a missing or foreign post answers 404/403 first.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from posts.models import Post

# bcrypt rejects input longer than this many bytes.
PASSWORD_MAX_BYTES = 72

# Identifiers are trimmed; passwords never are.
_Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
_Email = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=255)]


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded")
    return v


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class RoleEnum(str, Enum):
    admin = "admin"
    editor = "editor"


# ---------------------------------------------------------------------------
# Auth -- request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/auth/register.

    role is accepted from the client and defaults to editor. The password is
    hashed exactly as sent.
    """

    username: _Username
    email: _Email = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=1)
    role: RoleEnum = RoleEnum.editor

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: _Email
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


# ---------------------------------------------------------------------------
# Auth -- response models
# ---------------------------------------------------------------------------


class PublicUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
    role: str


class RegisterResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str = "User registered successfully"
    user_id: int = Field(serialization_alias="userId")


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    user: PublicUser


class ValidateResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: PublicUser


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


class PostCreate(BaseModel):
    """Request body for POST /api/posts.

    Any author_id in the body is ignored.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    content: str = ""
    status: Optional[str] = "draft"


class PostUpdate(BaseModel):
    """Request body for PUT /api/posts/{id}. All three fields are overwritten."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    content: str = ""
    status: Optional[str] = None


class PostResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    content: str
    status: str
    author_id: int
    author_name: Optional[str] = None
    created_at: str

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            status=post.status,
            author_id=post.author_id,
            author_name=post.author_name,
            created_at=post.created_at,
        )


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
