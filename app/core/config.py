"""Configuration management for the SME Diagnostics Engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # Environment
    DIAGNOSTICS_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Versions recorded on every diagnosis
    DIAGNOSTICS_MODEL_VERSION: str = Field(default="v1.0", description="Scoring model version")
    DIAGNOSTICS_PROMPT_VERSION: str = Field(default="v1.0", description="Narrative template version")

    # History paging
    DIAGNOSTICS_HISTORY_LIMIT: int = Field(
        default=10, ge=1, le=50, description="Default page size for run history"
    )
    DIAGNOSTICS_HISTORY_MAX_LIMIT: int = Field(
        default=50, ge=1, description="Largest page size a client may request"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance loaded from environment
    """
    return Settings()
