"""
Pydantic models for volunteer registration.
"""
from pydantic import Field

from app.auth.schemas import CamelModel


class VolunteerCreate(CamelModel):
    """Body of POST /volunteers."""
    has_vehicle: bool = False
    vehicle_type: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    availability: list[str] = Field(default_factory=list, description="Days of the week")
    preferred_tasks: list[str] = Field(default_factory=list, description="Task types, e.g. pickup")


class VolunteerCreated(CamelModel):
    """Response to POST /volunteers."""
    message: str = "Volunteer registration completed"
    volunteer_id: int
