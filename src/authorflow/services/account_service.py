"""Account service for profile, usage and tier information."""

from authorflow.auth.gateway import IdentityGateway
from authorflow.config import TIER_CONFIGS
from authorflow.errors.exceptions import UserNotFoundError
from authorflow.models.responses import AccountData, TierInfo
from authorflow.models.user import Identity
from authorflow.services.project_service import ProjectService


class AccountService:
    """Service for account and quota views."""

    def __init__(self, identity: IdentityGateway, projects: ProjectService):
        self._identity = identity
        self._projects = projects

    async def get_account(self, caller: Identity) -> AccountData:
        """Get the caller's profile together with project usage."""
        profile = await self._identity.get_profile(caller.id)
        if profile is None:
            raise UserNotFoundError()
        usage = await self._projects.get_usage(caller, profile)
        return AccountData(user=profile, usage=usage)

    async def list_tiers(self, caller: Identity | None = None) -> list[TierInfo]:
        """
        List subscription tiers and their project limits.

        For an authenticated caller with a profile, their own tier is marked
        ``current``.
        """
        current = None
        if caller is not None:
            profile = await self._identity.get_profile(caller.id)
            current = profile.subscription_tier if profile else None

        return [
            TierInfo(tier=tier.value, max_projects=config.max_projects, current=tier == current)
            for tier, config in TIER_CONFIGS.items()
        ]
