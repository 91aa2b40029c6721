"""
User schemas for request/response validation.
"""
from fastapi_users import schemas
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.auth.models import UserRole


class CamelModel(BaseModel):
    """Base model reading and writing camelCase JSON keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserCreate(schemas.BaseUserCreate):
    """
    Registration body.

    Inherits:
    - email: EmailStr (required)
    - password: str (required)
    - is_active, is_superuser, is_verified: ignored on safe creation
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str
    last_name: str
    phone: str
    role: UserRole


class LoginRequest(BaseModel):
    """Login body."""
    email: str
    password: str


class UserRead(CamelModel):
    """Public view of a user returned alongside a token."""
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    role: UserRole


class AuthResponse(BaseModel):
    """Response for a successful registration or login."""
    token: str
    user: UserRead


class TokenClaims(BaseModel):
    """Identity and role claims carried by a session token."""
    id: int
    email: str
    role: UserRole
