"""Application configuration and tier settings."""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings

from authorflow.errors.exceptions import ConfigurationError


class Backend(str, Enum):
    SUPABASE = "supabase"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    host: str = "0.0.0.0"
    port: int = 3001
    node_env: str = "development"
    api_prefix: str = "/api"
    cors_origin: str = "*"

    # Provider
    backend: Backend = Backend.SUPABASE
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_key: str | None = None
    http_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }

    def provider_credentials(self) -> tuple[str, str]:
        """Return the Supabase URL and anon key, or raise if either is missing."""
        if not self.supabase_url or not self.supabase_anon_key:
            raise ConfigurationError("Missing Supabase credentials")
        return self.supabase_url, self.supabase_anon_key

    def require_provider(self) -> None:
        """Fail fast when the provider backend is selected without credentials."""
        if self.backend == Backend.SUPABASE:
            self.provider_credentials()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class UserTier(str, Enum):
    """User subscription tiers."""

    FREE = "free"
    PRO = "pro"
    PLUS = "plus"


@dataclass(frozen=True)
class TierConfig:
    """Configuration for a user tier."""

    max_projects: int | None  # None means unbounded

    def allows_another_project(self, current_count: int) -> bool:
        return self.max_projects is None or current_count < self.max_projects


TIER_CONFIGS: dict[UserTier, TierConfig] = {
    UserTier.FREE: TierConfig(max_projects=3),
    UserTier.PRO: TierConfig(max_projects=None),
    UserTier.PLUS: TierConfig(max_projects=None),
}


def get_tier_config(tier: UserTier) -> TierConfig:
    """Get configuration for a user tier."""
    return TIER_CONFIGS[tier]
