"""Service container built once at startup and shared by all requests."""

import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from authorflow.auth.gateway import IdentityGateway
from authorflow.auth.memory import InMemoryIdentityGateway
from authorflow.auth.supabase import SupabaseIdentityGateway
from authorflow.config import Backend, Settings
from authorflow.services.account_service import AccountService
from authorflow.services.auth_service import AuthService
from authorflow.services.project_service import ProjectService
from authorflow.storage.base import ProjectStore
from authorflow.storage.memory import InMemoryProjectStore
from authorflow.storage.postgrest import PostgrestProjectStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Collaborators shared read-only across requests."""

    identity: IdentityGateway
    store: ProjectStore
    auth: AuthService
    projects: ProjectService
    accounts: AccountService
    http_client: httpx.AsyncClient | None = None

    @classmethod
    def from_backends(
        cls,
        identity: IdentityGateway,
        store: ProjectStore,
        http_client: httpx.AsyncClient | None = None,
    ) -> "Services":
        projects = ProjectService(store, identity)
        return cls(
            identity=identity,
            store=store,
            auth=AuthService(identity),
            projects=projects,
            accounts=AccountService(identity, projects),
            http_client=http_client,
        )

    @classmethod
    def in_memory(cls) -> "Services":
        """Services backed by in-process fakes."""
        return cls.from_backends(InMemoryIdentityGateway(), InMemoryProjectStore())

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def build_services(settings: Settings) -> Services:
    """Build the services selected by settings."""
    if settings.backend == Backend.MEMORY:
        logger.warning("Using in-memory backend; data is lost on restart")
        return Services.in_memory()

    supabase_url, anon_key = settings.provider_credentials()

    client = httpx.AsyncClient(timeout=settings.http_timeout)
    identity = SupabaseIdentityGateway(
        client,
        supabase_url,
        anon_key,
        settings.supabase_service_key,
    )
    store = PostgrestProjectStore(
        client,
        supabase_url,
        settings.supabase_service_key or anon_key,
    )
    logger.info("Using Supabase backend at %s", supabase_url)
    return Services.from_backends(identity, store, http_client=client)


def get_services(request: Request) -> Services:
    """Get the service container created at startup."""
    return request.app.state.services


def get_auth_service(request: Request) -> AuthService:
    return get_services(request).auth


def get_project_service(request: Request) -> ProjectService:
    return get_services(request).projects


def get_account_service(request: Request) -> AccountService:
    return get_services(request).accounts
