"""Identity gateway interface."""

from typing import Protocol

from authorflow.models.user import Identity, Session, User


class IdentityGateway(Protocol):
    """Operations delegated to the external identity provider.

    Implementations raise ``InvalidTokenError`` for rejected tokens,
    ``SignupFailedError`` and ``InvalidCredentialsError`` for refused
    credentials, and ``ProviderError`` when the provider itself fails.
    """

    async def verify_token(self, token: str) -> Identity:
        ...

    async def create_account(self, email: str, password: str) -> Identity:
        ...

    async def sign_in(self, email: str, password: str) -> tuple[Identity, Session]:
        ...

    async def get_profile(self, user_id: str) -> User | None:
        ...

    async def create_profile(self, user: User) -> User:
        ...
