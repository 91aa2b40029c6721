"""
Error taxonomy and exception handlers.

Every failure that reaches a client is a ``FoodRescueError`` rendered as
``{"message": ...}``. Internal details stay in the logs.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class FoodRescueError(Exception):
    """Base exception carrying the client-facing message and status code."""

    message = "Server error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateEmailError(FoodRescueError):
    """Raised when registering an email that already exists."""
    message = "User already exists"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentialsError(FoodRescueError):
    """Raised on unknown email or wrong password. Both read the same."""
    message = "Invalid credentials"
    status_code = status.HTTP_401_UNAUTHORIZED


class MissingTokenError(FoodRescueError):
    """Raised when a protected route is called without a bearer token."""
    message = "Access token required"
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(FoodRescueError):
    """Raised when the token signature, audience or expiry does not verify."""
    message = "Invalid or expired token"
    status_code = status.HTTP_403_FORBIDDEN


class ForbiddenRoleError(FoodRescueError):
    """Raised when role enforcement is on and the caller has the wrong role."""
    message = "Insufficient role for this operation"
    status_code = status.HTTP_403_FORBIDDEN


class VolunteerExistsError(FoodRescueError):
    """Raised when a user registers a second volunteer profile."""
    message = "Volunteer already registered"
    status_code = status.HTTP_400_BAD_REQUEST


class ServerError(FoodRescueError):
    """Catch-all for unexpected failures, including all database errors."""
    pass


def error_response(message: str, status_code: int) -> JSONResponse:
    """Create the fixed-shape error response."""
    return JSONResponse(status_code=status_code, content={"message": message})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(FoodRescueError)
    async def food_rescue_exception_handler(request: Request, exc: FoodRescueError):
        if exc.status_code >= 500:
            logger.error("{} {} -> {}", request.method, request.url.path, exc.status_code)
        else:
            logger.info(
                "{} {} -> {} {}",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        logger.info("Invalid body for {} {}: {}", request.method, request.url.path, fields)
        return error_response("Invalid request body", status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled {} on {} {}", type(exc).__name__, request.method, request.url.path
        )
        return error_response(ServerError.message, status.HTTP_500_INTERNAL_SERVER_ERROR)
