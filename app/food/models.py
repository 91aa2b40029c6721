"""
ORM models for addresses, food donations and food requests.
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.auth.models import enum_values
from app.core.database import Base


class DonationStatus(str, Enum):
    """Lifecycle of a donation. New donations are available."""
    AVAILABLE = "available"
    CLAIMED = "claimed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RequestStatus(str, Enum):
    """Lifecycle of a request. New requests are pending."""
    PENDING = "pending"
    MATCHED = "matched"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class Address(Base):
    """A pickup or delivery location, one row per submission."""
    __tablename__ = "addresses"

    address_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False, index=True)
    street_address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class FoodDonation(Base):
    """Food offered by a donor, collected from its own pickup address."""
    __tablename__ = "food_donations"

    donation_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False, index=True)
    food_category: Mapped[str] = mapped_column(String(50), nullable=False)
    food_type: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    pickup_address_id: Mapped[int] = mapped_column(
        ForeignKey("addresses.address_id"), nullable=False, unique=True
    )
    available_from: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    available_to: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[DonationStatus] = mapped_column(
        SAEnum(DonationStatus, name="donation_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=DonationStatus.AVAILABLE,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class FoodRequest(Base):
    """Food needed by a receiver, delivered to its own delivery address."""
    __tablename__ = "food_requests"

    request_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    receiver_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False, index=True)
    food_category: Mapped[str] = mapped_column(String(50), nullable=False)
    food_type: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    delivery_address_id: Mapped[int] = mapped_column(
        ForeignKey("addresses.address_id"), nullable=False, unique=True
    )
    needed_by: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        SAEnum(RequestStatus, name="request_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
