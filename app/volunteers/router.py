"""
Volunteer registration route.
"""
from fastapi import APIRouter, Depends, status
from loguru import logger

from app.auth.models import UserRole
from app.auth.schemas import TokenClaims
from app.auth.users import require_role
from app.core.errors import FoodRescueError, ServerError
from app.volunteers.repository import VolunteerRepository, get_volunteer_repository
from app.volunteers.schemas import VolunteerCreate, VolunteerCreated

router = APIRouter(prefix="/volunteers", tags=["volunteers"])


@router.post(
    "",
    response_model=VolunteerCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Complete volunteer registration",
)
async def register_volunteer(
    payload: VolunteerCreate,
    claims: TokenClaims = Depends(require_role(UserRole.VOLUNTEER)),
    repository: VolunteerRepository = Depends(get_volunteer_repository),
) -> VolunteerCreated:
    """
    Create the caller's volunteer profile.

    - **availability**: days of the week the volunteer can help
    - **preferredTasks**: task types such as pickup or delivery
    """
    try:
        volunteer = await repository.register_volunteer(claims.id, payload)
    except FoodRescueError:
        raise
    except Exception as e:
        logger.exception("Failed to register volunteer: {}", type(e).__name__)
        raise ServerError() from e

    return VolunteerCreated(volunteer_id=volunteer.volunteer_id)
