"""Account and tier endpoints."""

from fastapi import APIRouter, Depends

from authorflow.auth.dependencies import get_current_identity, get_optional_identity
from authorflow.models.responses import AccountResponse, TierListResponse
from authorflow.models.user import Identity
from authorflow.services.account_service import AccountService
from authorflow.services.container import get_account_service

router = APIRouter(tags=["Account"])


@router.get(
    "/account",
    response_model=AccountResponse,
    summary="Get Account",
    description="Get the profile and project usage of the authenticated user.",
)
async def get_account(
    caller: Identity = Depends(get_current_identity),
    account_service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """
    Get account details.

    Returns the profile and project quota:
    - Subscription tier
    - Project limit (null when unlimited)
    - Projects used and remaining
    """
    return AccountResponse(data=await account_service.get_account(caller))


@router.get(
    "/tiers",
    response_model=TierListResponse,
    summary="List Tiers",
    description="List subscription tiers and their project limits.",
)
async def list_tiers(
    caller: Identity | None = Depends(get_optional_identity),
    account_service: AccountService = Depends(get_account_service),
) -> TierListResponse:
    """Public; an authenticated caller sees their own tier marked `current`."""
    return TierListResponse(data=await account_service.list_tiers(caller))
