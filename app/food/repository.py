"""
Relational reads and writes for donations and requests.

Each create writes the address row and the entity row in one transaction;
a failure on either rolls both back.
"""
from fastapi import Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.core.database import get_async_session
from app.food.models import (
    Address,
    DonationStatus,
    FoodDonation,
    FoodRequest,
    RequestStatus,
)
from app.food.schemas import (
    AddressIn,
    DonationCreate,
    DonationListing,
    RequestCreate,
    RequestListing,
)

ADDRESS_COLUMNS = (
    Address.street_address,
    Address.city,
    Address.state,
    Address.zip_code,
    Address.latitude,
    Address.longitude,
)

CONTACT_COLUMNS = (User.first_name, User.last_name, User.phone)


class FoodRepository:
    """Data access for food donations, food requests and their addresses."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _add_address(self, user_id: int, address: AddressIn) -> Address:
        row = Address(
            user_id=user_id,
            street_address=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            latitude=address.latitude,
            longitude=address.longitude,
        )
        self.session.add(row)
        return row

    async def create_donation(self, donor_id: int, payload: DonationCreate) -> FoodDonation:
        """Insert the pickup address and the donation that references it."""
        try:
            address = self._add_address(donor_id, payload.address)
            await self.session.flush()

            donation = FoodDonation(
                donor_id=donor_id,
                food_category=payload.food_category,
                food_type=payload.food_type,
                quantity=payload.quantity,
                description=payload.description,
                pickup_address_id=address.address_id,
                available_from=payload.available_from,
                available_to=payload.available_to,
                status=DonationStatus.AVAILABLE,
            )
            self.session.add(donation)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.debug("Donation {} created by user {}", donation.donation_id, donor_id)
        return donation

    async def create_request(self, receiver_id: int, payload: RequestCreate) -> FoodRequest:
        """Insert the delivery address and the request that references it."""
        try:
            address = self._add_address(receiver_id, payload.address)
            await self.session.flush()

            food_request = FoodRequest(
                receiver_id=receiver_id,
                food_category=payload.food_category,
                food_type=payload.food_type,
                quantity=payload.quantity,
                description=payload.description,
                delivery_address_id=address.address_id,
                needed_by=payload.needed_by,
                status=RequestStatus.PENDING,
            )
            self.session.add(food_request)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.debug("Request {} created by user {}", food_request.request_id, receiver_id)
        return food_request

    async def list_donations(self) -> list[DonationListing]:
        """All available donations joined with pickup address and donor contact."""
        stmt = (
            select(
                FoodDonation.donation_id,
                FoodDonation.donor_id,
                FoodDonation.food_category,
                FoodDonation.food_type,
                FoodDonation.quantity,
                FoodDonation.description,
                FoodDonation.pickup_address_id,
                FoodDonation.available_from,
                FoodDonation.available_to,
                FoodDonation.status,
                FoodDonation.created_at,
                *ADDRESS_COLUMNS,
                *CONTACT_COLUMNS,
            )
            .join(Address, FoodDonation.pickup_address_id == Address.address_id)
            .join(User, FoodDonation.donor_id == User.id)
            .where(FoodDonation.status == DonationStatus.AVAILABLE)
            .order_by(FoodDonation.donation_id)
        )
        result = await self.session.execute(stmt)
        return [DonationListing.model_validate(dict(row)) for row in result.mappings()]

    async def list_requests(self) -> list[RequestListing]:
        """All pending requests joined with delivery address and receiver contact."""
        stmt = (
            select(
                FoodRequest.request_id,
                FoodRequest.receiver_id,
                FoodRequest.food_category,
                FoodRequest.food_type,
                FoodRequest.quantity,
                FoodRequest.description,
                FoodRequest.delivery_address_id,
                FoodRequest.needed_by,
                FoodRequest.status,
                FoodRequest.created_at,
                *ADDRESS_COLUMNS,
                *CONTACT_COLUMNS,
            )
            .join(Address, FoodRequest.delivery_address_id == Address.address_id)
            .join(User, FoodRequest.receiver_id == User.id)
            .where(FoodRequest.status == RequestStatus.PENDING)
            .order_by(FoodRequest.request_id)
        )
        result = await self.session.execute(stmt)
        return [RequestListing.model_validate(dict(row)) for row in result.mappings()]


def get_food_repository(
    session: AsyncSession = Depends(get_async_session),
) -> FoodRepository:
    """Dependency to get the food repository."""
    return FoodRepository(session)
