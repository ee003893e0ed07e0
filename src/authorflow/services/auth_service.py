"""Auth service: signup and login on top of the identity gateway."""

import logging

from authorflow.auth.gateway import IdentityGateway
from authorflow.config import UserTier
from authorflow.models.user import Identity, Session, User

logger = logging.getLogger(__name__)


class AuthService:
    """Signup and login."""

    def __init__(self, identity: IdentityGateway):
        self._identity = identity

    async def sign_up(self, email: str, password: str, username: str) -> Identity:
        """
        Create a provider account, then its profile row.

        The two writes are not transactional. If the profile insert fails the
        account still exists, the failure is logged and the signup is
        reported as successful; nothing is rolled back or retried.
        """
        identity = await self._identity.create_account(email, password)

        try:
            await self._identity.create_profile(
                User(
                    id=identity.id,
                    email=email,
                    username=username,
                    subscription_tier=UserTier.FREE,
                )
            )
        except Exception:
            logger.exception(
                "Profile creation failed for user %s",
                identity.id,
                extra={"user_id": identity.id, "step": "create_profile"},
            )
        else:
            logger.info("Signed up user %s", identity.id)

        return identity

    async def sign_in(self, email: str, password: str) -> tuple[Identity, Session]:
        """Exchange email and password for an identity and session."""
        return await self._identity.sign_in(email, password)
