"""
Relational writes for volunteer profiles.
"""
from fastapi import Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_async_session
from app.core.errors import VolunteerExistsError
from app.volunteers.models import Volunteer, VolunteerAvailability, VolunteerTask
from app.volunteers.schemas import VolunteerCreate


class VolunteerRepository:
    """Data access for volunteers, their availability and preferred tasks."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user(self, user_id: int) -> Volunteer | None:
        """Return the profile owned by ``user_id``, if any."""
        result = await self.session.execute(
            select(Volunteer).where(Volunteer.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def register_volunteer(self, user_id: int, payload: VolunteerCreate) -> Volunteer:
        """
        Create the volunteer profile with its availability and task rows.

        All rows are written in one transaction. Repeated days or tasks are
        stored once.

        Raises:
            VolunteerExistsError: If the user already has a profile
        """
        if await self.get_by_user(user_id) is not None:
            raise VolunteerExistsError()

        try:
            volunteer = Volunteer(
                user_id=user_id,
                has_vehicle=payload.has_vehicle,
                vehicle_type=payload.vehicle_type,
                emergency_contact_name=payload.emergency_contact_name,
                emergency_contact_phone=payload.emergency_contact_phone,
            )
            self.session.add(volunteer)
            await self.session.flush()

            for day in dict.fromkeys(payload.availability):
                self.session.add(
                    VolunteerAvailability(volunteer_id=volunteer.volunteer_id, day_of_week=day)
                )
            for task in dict.fromkeys(payload.preferred_tasks):
                self.session.add(
                    VolunteerTask(volunteer_id=volunteer.volunteer_id, task_type=task)
                )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.debug(
            "Volunteer {} registered for user {} ({} days, {} tasks)",
            volunteer.volunteer_id,
            user_id,
            len(payload.availability),
            len(payload.preferred_tasks),
        )
        return volunteer


def get_volunteer_repository(
    session: AsyncSession = Depends(get_async_session),
) -> VolunteerRepository:
    """Dependency to get the volunteer repository."""
    return VolunteerRepository(session)
