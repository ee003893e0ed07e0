"""In-memory identity gateway for development and testing."""

import hashlib
import hmac
import secrets
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from authorflow.config import UserTier
from authorflow.errors.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    SignupFailedError,
)
from authorflow.models.user import Identity, Session, User
from authorflow.storage.memory import InMemoryStorage

TOKEN_TTL_SECONDS = 3600


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, 10_000)


@dataclass
class _Account:
    identity: Identity
    salt: bytes
    password_hash: bytes

    def check_password(self, password: str) -> bool:
        return hmac.compare_digest(self.password_hash, _hash_password(password, self.salt))


class InMemoryIdentityGateway:
    """Identity gateway that keeps accounts, tokens and profiles in dictionaries."""

    def __init__(
        self,
        token_ttl: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._accounts: dict[str, _Account] = {}  # key: lowercased email
        self._tokens: dict[str, tuple[Identity, float]] = {}  # token -> (identity, expires at)
        self._token_ttl = token_ttl
        self._clock = clock
        self.profiles: InMemoryStorage[User] = InMemoryStorage[User]()

    async def verify_token(self, token: str) -> Identity:
        entry = self._tokens.get(token)
        if entry is None:
            raise InvalidTokenError()
        identity, expires_at = entry
        if self._clock() >= expires_at:
            del self._tokens[token]
            raise InvalidTokenError()
        return identity

    async def create_account(self, email: str, password: str) -> Identity:
        key = email.lower()
        if key in self._accounts:
            raise SignupFailedError("User already registered")

        identity = Identity(id=str(uuid.uuid4()), email=email, role="authenticated")
        salt = secrets.token_bytes(16)
        self._accounts[key] = _Account(identity, salt, _hash_password(password, salt))
        return identity

    async def sign_in(self, email: str, password: str) -> tuple[Identity, Session]:
        account = self._accounts.get(email.lower())
        if account is None or not account.check_password(password):
            raise InvalidCredentialsError()
        token = self.issue_token(account.identity)
        return account.identity, Session(access_token=token, expires_in=self._token_ttl)

    async def get_profile(self, user_id: str) -> User | None:
        return self.profiles.get(user_id)

    async def create_profile(self, user: User) -> User:
        return self.profiles.create(user)

    def issue_token(self, identity: Identity) -> str:
        """Mint a bearer token for an identity, valid for the configured TTL."""
        token = secrets.token_urlsafe(32)
        self._tokens[token] = (identity, self._clock() + self._token_ttl)
        return token

    def revoke_token(self, token: str) -> bool:
        return self._tokens.pop(token, None) is not None

    def find_profile_by_email(self, email: str) -> User | None:
        return self.profiles.find_one(lambda u: u.email.lower() == email.lower())

    async def register(
        self,
        email: str,
        password: str,
        username: str,
        tier: UserTier = UserTier.FREE,
    ) -> tuple[User, str]:
        """Create an account with a profile and return it with a bearer token (for seeding)."""
        identity = await self.create_account(email, password)
        profile = await self.create_profile(
            User(id=identity.id, email=email, username=username, subscription_tier=tier)
        )
        return profile, self.issue_token(identity)

    def set_tier(self, user_id: str, tier: UserTier) -> User | None:
        """Change a user's tier, as the billing process would."""
        profile = self.profiles.get(user_id)
        if profile is None:
            return None
        return self.profiles.update(user_id, profile.model_copy(update={"subscription_tier": tier}))
