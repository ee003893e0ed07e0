"""Supabase identity gateway (GoTrue auth + PostgREST ``users`` table)."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from authorflow.errors.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    ProviderError,
    SignupFailedError,
)
from authorflow.models.user import Identity, Session, User

logger = logging.getLogger(__name__)


def provider_message(response: httpx.Response) -> str | None:
    """Pull the human-readable error out of a GoTrue/PostgREST error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("msg", "error_description", "message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def identity_from_user(data: Any) -> Identity:
    """Build an Identity from a GoTrue user object."""
    if not isinstance(data, dict) or not data.get("id"):
        raise ProviderError("Provider response did not include a user id")
    try:
        return Identity(id=data["id"], email=data.get("email") or "", role=data.get("role"))
    except ValidationError as e:
        raise ProviderError(
            "Provider returned a malformed user", details={"reason": str(e)}
        ) from e


class SupabaseIdentityGateway:
    """Identity gateway backed by a Supabase project.

    The HTTP client is created once at startup and shared; this class holds
    no per-request state.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        anon_key: str,
        service_key: str | None = None,
    ):
        self._client = client
        base = base_url.rstrip("/")
        self._auth_url = f"{base}/auth/v1"
        self._users_url = f"{base}/rest/v1/users"
        self._anon_key = anon_key
        self._rest_key = service_key or anon_key

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Identity provider request %s %s failed: %s", method, url, e)
            raise ProviderError(details={"reason": str(e)}) from e

    def _auth_headers(self, token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {token or self._anon_key}",
        }

    def _rest_headers(self) -> dict[str, str]:
        return {
            "apikey": self._rest_key,
            "Authorization": f"Bearer {self._rest_key}",
        }

    def _json(self, response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError:
            raise self._unexpected(response, operation) from None

    @staticmethod
    def _unexpected(response: httpx.Response, operation: str) -> ProviderError:
        logger.error(
            "Identity provider returned %s during %s: %s",
            response.status_code,
            operation,
            response.text,
        )
        return ProviderError(details={"status": response.status_code, "operation": operation})

    async def verify_token(self, token: str) -> Identity:
        response = await self._send(
            "GET", f"{self._auth_url}/user", headers=self._auth_headers(token)
        )
        if 400 <= response.status_code < 500:
            raise InvalidTokenError()
        if response.status_code >= 500:
            raise self._unexpected(response, "verify_token")
        return identity_from_user(self._json(response, "verify_token"))

    async def create_account(self, email: str, password: str) -> Identity:
        response = await self._send(
            "POST",
            f"{self._auth_url}/signup",
            json={"email": email, "password": password},
            headers=self._auth_headers(),
        )
        if 400 <= response.status_code < 500:
            raise SignupFailedError(provider_message(response))
        if response.status_code >= 500:
            raise self._unexpected(response, "signup")

        data = self._json(response, "signup")
        # With email confirmation enabled the body is the user itself
        user = data.get("user") if isinstance(data, dict) else None
        return identity_from_user(user or data)

    async def sign_in(self, email: str, password: str) -> tuple[Identity, Session]:
        response = await self._send(
            "POST",
            f"{self._auth_url}/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._auth_headers(),
        )
        if 400 <= response.status_code < 500:
            raise InvalidCredentialsError(provider_message(response))
        if response.status_code >= 500:
            raise self._unexpected(response, "sign_in")

        data = self._json(response, "sign_in")
        if not isinstance(data, dict):
            raise self._unexpected(response, "sign_in")
        identity = identity_from_user(data.get("user"))
        try:
            session = Session.model_validate(data)
        except ValidationError as e:
            raise ProviderError(
                "Provider returned a malformed session", details={"reason": str(e)}
            ) from e
        return identity, session

    async def get_profile(self, user_id: str) -> User | None:
        response = await self._send(
            "GET",
            self._users_url,
            params={"select": "*", "id": f"eq.{user_id}", "limit": "1"},
            headers=self._rest_headers(),
        )
        if response.status_code >= 400:
            raise self._unexpected(response, "get_profile")
        rows = response.json()
        return User.model_validate(rows[0]) if rows else None

    async def create_profile(self, user: User) -> User:
        response = await self._send(
            "POST",
            self._users_url,
            params={"select": "*"},
            json=[to_jsonable_python(user.model_dump())],
            headers={**self._rest_headers(), "Prefer": "return=representation"},
        )
        if response.status_code >= 400:
            raise self._unexpected(response, "create_profile")
        rows = response.json()
        return User.model_validate(rows[0]) if rows else user
