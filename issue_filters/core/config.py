"""
Consolidated configuration for the issue filter service.
"""
from functools import lru_cache
from typing import Dict, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Single source of truth for all application configuration.

    Values come from the environment or a ``.env`` file. Cosmos settings keep
    the ``AZURE_COSMOS_*`` names used by the deployment scripts.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    # Cosmos DB
    cosmos_endpoint: Optional[str] = Field(None, validation_alias=AliasChoices("AZURE_COSMOS_ENDPOINT", "cosmos_endpoint"))
    cosmos_key: Optional[str] = Field(None, validation_alias=AliasChoices("AZURE_COSMOS_KEY", "cosmos_key"))
    cosmos_database: str = Field("IssueFiltersDB", validation_alias=AliasChoices("AZURE_COSMOS_DB", "cosmos_database"))
    cosmos_prefix: str = Field("issues_", validation_alias=AliasChoices("AZURE_COSMOS_DB_PREFIX", "cosmos_prefix"))

    # Global permission tokens that gate sharing and acting on behalf of owners
    sharing_permission: str = Field("shareDashboard", validation_alias=AliasChoices("SHARING_PERMISSION", "sharing_permission"))
    admin_permission: str = Field("admin", validation_alias=AliasChoices("ADMIN_PERMISSION", "admin_permission"))

    @property
    def cosmos_containers(self) -> Dict[str, str]:
        """Get all cosmos container names with prefix"""
        return {
            "auth": f"{self.cosmos_prefix}auth",
            "issue_filters": f"{self.cosmos_prefix}issue_filters",
            "issue_filter_favourites": f"{self.cosmos_prefix}issue_filter_favourites",
            "counters": f"{self.cosmos_prefix}counters",
        }


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration.

    Cached so every caller shares one instance, while tests can still build
    their own ``AppConfig`` or call ``get_config.cache_clear()``.
    """
    return AppConfig()
