"""
Pydantic models for donation and request bodies and listings.
"""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from app.auth.schemas import CamelModel
from app.food.models import DonationStatus, RequestStatus


# ============================================================================
# Request Models
# ============================================================================

class AddressIn(CamelModel):
    """Address submitted with a donation or request."""
    street: str
    city: str
    state: str
    zip_code: str
    latitude: float | None = None
    longitude: float | None = None


class FoodItemIn(CamelModel):
    """Fields shared by donations and requests."""
    food_category: str
    food_type: str
    quantity: str
    description: str | None = None
    address: AddressIn

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_as_text(cls, v: Any) -> Any:
        """Accept numeric quantities and keep them as text."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class DonationCreate(FoodItemIn):
    """Body of POST /donations."""
    available_from: datetime
    available_to: datetime


class RequestCreate(FoodItemIn):
    """Body of POST /requests."""
    needed_by: datetime


# ============================================================================
# Response Models
# ============================================================================

class DonationCreated(CamelModel):
    """Response to POST /donations."""
    message: str = "Donation created successfully"
    donation_id: int


class RequestCreated(CamelModel):
    """Response to POST /requests."""
    message: str = "Request created successfully"
    request_id: int


class ListingBase(BaseModel):
    """Joined address and owner contact columns shared by both listings."""
    model_config = ConfigDict(from_attributes=True)

    food_category: str
    food_type: str
    quantity: str
    description: str | None = None
    created_at: datetime | None = None
    street_address: str
    city: str
    state: str
    zip_code: str
    latitude: float | None = None
    longitude: float | None = None
    first_name: str
    last_name: str
    phone: str


class DonationListing(ListingBase):
    """An available donation with its pickup address and donor contact."""
    donation_id: int
    donor_id: int
    pickup_address_id: int
    available_from: datetime
    available_to: datetime
    status: DonationStatus


class RequestListing(ListingBase):
    """A pending request with its delivery address and receiver contact."""
    request_id: int
    receiver_id: int
    delivery_address_id: int
    needed_by: datetime
    status: RequestStatus
