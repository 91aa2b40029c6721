"""
ORM models for volunteer profiles.
"""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Volunteer(Base):
    """Volunteer profile. At most one per user."""
    __tablename__ = "volunteers"

    volunteer_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False, unique=True)
    has_vehicle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    vehicle_type: Mapped[str | None] = mapped_column(String(50))
    emergency_contact_name: Mapped[str | None] = mapped_column(String(100))
    emergency_contact_phone: Mapped[str | None] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class VolunteerAvailability(Base):
    """A day of the week the volunteer is available."""
    __tablename__ = "volunteer_availability"

    volunteer_id: Mapped[int] = mapped_column(
        ForeignKey("volunteers.volunteer_id"), primary_key=True
    )
    day_of_week: Mapped[str] = mapped_column(String(10), primary_key=True)


class VolunteerTask(Base):
    """A task type the volunteer prefers."""
    __tablename__ = "volunteer_tasks"

    volunteer_id: Mapped[int] = mapped_column(
        ForeignKey("volunteers.volunteer_id"), primary_key=True
    )
    task_type: Mapped[str] = mapped_column(String(50), primary_key=True)
