"""Authentication module."""

from authorflow.auth.dependencies import get_current_identity, get_optional_identity
from authorflow.auth.gateway import IdentityGateway
from authorflow.auth.memory import InMemoryIdentityGateway
from authorflow.auth.supabase import SupabaseIdentityGateway

__all__ = [
    "IdentityGateway",
    "InMemoryIdentityGateway",
    "SupabaseIdentityGateway",
    "get_current_identity",
    "get_optional_identity",
]
