"""
FastAPI Users configuration, user manager, token strategy and access guard.
"""
from typing import AsyncGenerator, Callable

import jwt
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, OAuth2PasswordRequestForm
from fastapi_users import BaseUserManager, IntegerIDMixin
from fastapi_users.authentication import JWTStrategy
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.jwt import decode_jwt, generate_jwt
from fastapi_users.password import PasswordHelper
from loguru import logger
from pwdlib import PasswordHash
from pwdlib.hashers.bcrypt import BcryptHasher
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User, UserRole
from app.auth.schemas import TokenClaims
from app.core.config import Settings, get_app_settings
from app.core.database import get_async_session
from app.core.errors import (
    ForbiddenRoleError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)

TOKEN_AUDIENCE = ["food-rescue:auth"]


async def get_user_db(
    session: AsyncSession = Depends(get_async_session),
) -> AsyncGenerator[SQLAlchemyUserDatabase, None]:
    """Get the user database adapter."""
    yield SQLAlchemyUserDatabase(session, User)


class UserManager(IntegerIDMixin, BaseUserManager[User, int]):
    """
    User manager for registration and credential checks.

    Passwords are hashed with bcrypt at ``settings.bcrypt_rounds``.
    """

    def __init__(self, user_db: SQLAlchemyUserDatabase, settings: Settings):
        password_helper = PasswordHelper(
            PasswordHash((BcryptHasher(rounds=settings.bcrypt_rounds),))
        )
        super().__init__(user_db, password_helper)
        self.reset_password_token_secret = settings.secret_key
        self.verification_token_secret = settings.secret_key

    async def on_after_register(
        self, user: User, request: Request | None = None
    ) -> None:
        """Handle post-registration logic."""
        logger.info("User {} registered as {}", user.id, user.role.value)

    async def authenticate_email(self, email: str, password: str) -> User:
        """
        Verify an email/password pair.

        Unknown email and wrong password raise the same error so the response
        does not reveal which accounts exist.
        """
        credentials = OAuth2PasswordRequestForm(username=email, password=password)
        user = await self.authenticate(credentials)
        if user is None:
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()
        return user


async def get_user_manager(
    user_db: SQLAlchemyUserDatabase = Depends(get_user_db),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[UserManager, None]:
    """Get the user manager instance."""
    yield UserManager(user_db, settings)


# JWT Authentication Configuration
class ClaimsJWTStrategy(JWTStrategy[User, int]):
    """
    JWT strategy whose tokens carry the caller's id, email and role.

    Verification is stateless: claims are trusted until the token expires.
    """

    async def write_token(self, user: User) -> str:
        """Sign the id, email and role claims for ``user``."""
        data = {
            "sub": str(user.id),
            "id": user.id,
            "email": user.email,
            "role": UserRole(user.role).value,
            "aud": self.token_audience,
        }
        return generate_jwt(
            data, self.encode_key, self.lifetime_seconds, algorithm=self.algorithm
        )

    def read_claims(self, token: str) -> TokenClaims:
        """Decode and validate a token, raising ``InvalidTokenError`` on any failure."""
        try:
            payload = decode_jwt(
                token, self.decode_key, self.token_audience, algorithms=[self.algorithm]
            )
            return TokenClaims.model_validate(payload)
        except (jwt.PyJWTError, ValidationError) as e:
            raise InvalidTokenError() from e


def build_jwt_strategy(settings: Settings) -> ClaimsJWTStrategy:
    """Build the JWT strategy for the given settings."""
    return ClaimsJWTStrategy(
        secret=settings.secret_key,
        lifetime_seconds=settings.access_token_expire_minutes * 60,
        token_audience=TOKEN_AUDIENCE,
        algorithm=settings.algorithm,
    )


def get_jwt_strategy(
    settings: Settings = Depends(get_app_settings),
) -> ClaimsJWTStrategy:
    """Get JWT strategy for authentication."""
    return build_jwt_strategy(settings)


authorization_header = APIKeyHeader(
    name="Authorization", scheme_name="Bearer token", auto_error=False
)


def token_from_header(authorization: str | None) -> str | None:
    """Return the second word of an ``Authorization`` header, whatever the scheme."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


async def current_claims(
    authorization: str | None = Depends(authorization_header),
    strategy: ClaimsJWTStrategy = Depends(get_jwt_strategy),
) -> TokenClaims:
    """
    Access guard for protected routes.

    No token in the header -> 401. Anything that does not verify, including a
    token sent under another scheme such as ``Basic`` -> 403.
    """
    token = token_from_header(authorization)
    if token is None:
        raise MissingTokenError()

    return strategy.read_claims(token)


def require_role(*roles: UserRole) -> Callable:
    """
    Build a guard that also checks the role claim.

    The check only applies when ``settings.enforce_roles`` is on; otherwise
    any authenticated caller passes.
    """
    async def role_guard(
        claims: TokenClaims = Depends(current_claims),
        settings: Settings = Depends(get_app_settings),
    ) -> TokenClaims:
        if settings.enforce_roles and claims.role not in roles:
            raise ForbiddenRoleError()
        return claims

    return role_guard
