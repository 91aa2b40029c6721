"""
Authentication routes.

- POST /register - Create an account and receive a token
- POST /login - Exchange credentials for a token
"""
from fastapi import APIRouter, Depends, Request, status
from fastapi_users import exceptions
from loguru import logger

from app.auth.schemas import AuthResponse, LoginRequest, UserCreate, UserRead
from app.auth.users import ClaimsJWTStrategy, UserManager, get_jwt_strategy, get_user_manager
from app.core.errors import DuplicateEmailError, FoodRescueError, ServerError

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: Request,
    user_create: UserCreate,
    user_manager: UserManager = Depends(get_user_manager),
    strategy: ClaimsJWTStrategy = Depends(get_jwt_strategy),
) -> AuthResponse:
    """
    Register a donor, receiver or volunteer.

    Returns a session token and the created user. An email that is already
    registered is rejected with 400.
    """
    try:
        user = await user_manager.create(user_create, safe=True, request=request)
        token = await strategy.write_token(user)
    except exceptions.UserAlreadyExists:
        raise DuplicateEmailError()
    except Exception as e:
        logger.exception("Registration failed: {}", type(e).__name__)
        raise ServerError() from e

    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
)
async def login(
    credentials: LoginRequest,
    user_manager: UserManager = Depends(get_user_manager),
    strategy: ClaimsJWTStrategy = Depends(get_jwt_strategy),
) -> AuthResponse:
    """
    Verify credentials and issue a session token.

    Unknown email and wrong password both return 401 with the same message.
    """
    try:
        user = await user_manager.authenticate_email(credentials.email, credentials.password)
        token = await strategy.write_token(user)
    except FoodRescueError:
        raise
    except Exception as e:
        logger.exception("Login failed: {}", type(e).__name__)
        raise ServerError() from e

    return AuthResponse(token=token, user=UserRead.model_validate(user))
