"""
Configuration management for Seed Export.

This module provides environment-based configuration using Pydantic BaseSettings.
Credentials for the hosted backend are read from the environment or from a
``.env`` file at the project root, so that no key ever lives in the registry
file or on the command line.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SEED_EXPORT_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

DEFAULT_OUTPUT_PATH = "supabase/migrations/016_seed_data_extracted.sql"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the SEED_EXPORT_ prefix. For example,
    SEED_EXPORT_OUTPUT_PATH overrides ``output_path``. Backend credentials also
    accept the conventional unprefixed names:

    - SUPABASE_URL / SUPABASE_PROJECT_ID: where the rows are read from
    - SERVICE_ROLE_KEY: full-access key (preferred)
    - SUPABASE_ANON_KEY: public key, subject to row-level security
    - LOG_LEVEL: logging level (uppercase)
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    # Backend location
    supabase_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SEED_EXPORT_SUPABASE_URL", "SUPABASE_URL"),
        description="Base URL of the Supabase project (https://<ref>.supabase.co)",
    )
    supabase_project_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "SEED_EXPORT_SUPABASE_PROJECT_ID", "SUPABASE_PROJECT_ID"
        ),
        description="Supabase project ref, used when no URL is configured",
    )

    # Credentials
    service_role_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "SEED_EXPORT_SERVICE_ROLE_KEY", "SERVICE_ROLE_KEY"
        ),
        description="Service role key granting full table access",
    )
    anon_key: str = Field(
        default="",
        validation_alias=AliasChoices("SEED_EXPORT_ANON_KEY", "SUPABASE_ANON_KEY"),
        description="Anonymous key, used when no service role key is configured",
    )

    # Run configuration
    output_path: str = Field(
        default=DEFAULT_OUTPUT_PATH,
        description="Location of the generated seed SQL file",
    )
    registry_path: Optional[str] = Field(
        default=None,
        description="YAML table registry; the built-in registry is used when unset",
    )

    # HTTP behaviour
    request_timeout: int = Field(
        default=30, ge=1, description="Row fetch request timeout in seconds"
    )
    retry_max: int = Field(
        default=3, ge=0, description="Maximum retry attempts for a row fetch"
    )

    @field_validator("supabase_url")
    @classmethod
    def _normalize_supabase_url(cls, value: Optional[str]) -> Optional[str]:
        """Strip trailing slashes and a pasted ``/rest/v1`` suffix."""
        if not value:
            return None
        url = value.strip().rstrip("/")
        if url.endswith("/rest/v1"):
            url = url[: -len("/rest/v1")]
        return url

    @property
    def base_url(self) -> Optional[str]:
        """Resolved project URL, derived from the project ref when needed."""
        if self.supabase_url:
            return self.supabase_url
        if self.supabase_project_id:
            return f"https://{self.supabase_project_id}.supabase.co"
        return None

    @property
    def project_ref(self) -> str:
        """Project identifier shown in the artifact header."""
        if self.supabase_project_id:
            return self.supabase_project_id
        if self.supabase_url:
            host = self.supabase_url.split("://", 1)[-1]
            return host.split(".", 1)[0]
        return "unknown"

    @property
    def api_key(self) -> str:
        """Key used for requests: service role key first, anon key otherwise."""
        return self.service_role_key or self.anon_key

    @property
    def uses_service_role(self) -> bool:
        return bool(self.service_role_key)

    model_config = SettingsConfigDict(
        env_prefix="SEED_EXPORT_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
