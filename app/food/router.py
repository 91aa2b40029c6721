"""
Donation and request routes.

- POST /donations - Post a food donation
- GET /donations - List available donations
- POST /requests - Post a food request
- GET /requests - List pending requests
"""
from fastapi import APIRouter, Depends, status
from loguru import logger

from app.auth.models import UserRole
from app.auth.schemas import TokenClaims
from app.auth.users import current_claims, require_role
from app.core.errors import ServerError
from app.food.repository import FoodRepository, get_food_repository
from app.food.schemas import (
    DonationCreate,
    DonationCreated,
    DonationListing,
    RequestCreate,
    RequestCreated,
    RequestListing,
)

router = APIRouter(tags=["food"])


# ============================================================================
# Donations
# ============================================================================

@router.post(
    "/donations",
    response_model=DonationCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a food donation",
)
async def create_donation(
    payload: DonationCreate,
    claims: TokenClaims = Depends(require_role(UserRole.DONOR)),
    repository: FoodRepository = Depends(get_food_repository),
) -> DonationCreated:
    """
    Post a donation on behalf of the authenticated donor.

    The pickup address is stored with the donation; the donation starts as
    available.
    """
    try:
        donation = await repository.create_donation(claims.id, payload)
    except Exception as e:
        logger.exception("Failed to create donation: {}", type(e).__name__)
        raise ServerError() from e

    return DonationCreated(donation_id=donation.donation_id)


@router.get(
    "/donations",
    response_model=list[DonationListing],
    summary="List available donations",
)
async def list_donations(
    claims: TokenClaims = Depends(current_claims),
    repository: FoodRepository = Depends(get_food_repository),
) -> list[DonationListing]:
    """List every available donation with its pickup address and donor contact."""
    try:
        return await repository.list_donations()
    except Exception as e:
        logger.exception("Failed to list donations: {}", type(e).__name__)
        raise ServerError() from e


# ============================================================================
# Requests
# ============================================================================

@router.post(
    "/requests",
    response_model=RequestCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a food request",
)
async def create_request(
    payload: RequestCreate,
    claims: TokenClaims = Depends(require_role(UserRole.RECEIVER)),
    repository: FoodRepository = Depends(get_food_repository),
) -> RequestCreated:
    """Post a request on behalf of the authenticated receiver."""
    try:
        food_request = await repository.create_request(claims.id, payload)
    except Exception as e:
        logger.exception("Failed to create request: {}", type(e).__name__)
        raise ServerError() from e

    return RequestCreated(request_id=food_request.request_id)


@router.get(
    "/requests",
    response_model=list[RequestListing],
    summary="List pending requests",
)
async def list_requests(
    claims: TokenClaims = Depends(current_claims),
    repository: FoodRepository = Depends(get_food_repository),
) -> list[RequestListing]:
    """List every pending request with its delivery address and receiver contact."""
    try:
        return await repository.list_requests()
    except Exception as e:
        logger.exception("Failed to list requests: {}", type(e).__name__)
        raise ServerError() from e
