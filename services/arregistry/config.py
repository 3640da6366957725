"""
Configuration management for the registry server.

Non-secret configuration loaded from YAML file, overridden by environment variables.
Credentials are never configured here; they come from the ambient Google identity.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def yaml_config_settings_source() -> dict[str, Any]:
    """Load configuration from YAML file."""
    config_path = Path("/etc/arregistry/config.yaml")
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


class ConfigurationError(Exception):
    """Raised when required configuration is missing at startup."""


# --- Artifact Registry Configuration ---


class ArtifactRegistryConfig(BaseModel):
    """Backing Artifact Registry configuration."""

    project_id: str = Field(default="", description="GCP project ID (required)")
    location: str = Field(default="us", description="Artifact Registry location/region")
    page_size: int = Field(
        default=1000,
        description="Page size for version and file listing calls",
    )
    api_url: str = Field(default="https://artifactregistry.googleapis.com")
    download_url: str = Field(default="https://artifactregistry.googleapis.com")
    scopes: list[str] = Field(
        default=["https://www.googleapis.com/auth/cloud-platform"],
    )


# --- CORS Configuration ---


class CORSConfig(BaseModel):
    """CORS (Cross-Origin Resource Sharing) configuration."""

    allow_origins: list[str] = Field(
        default_factory=list,
        description="Allowed origins. Empty list means CORS middleware is disabled.",
    )
    allow_credentials: bool = Field(default=False)
    allow_methods: list[str] = Field(default=["GET", "OPTIONS"])
    allow_headers: list[str] = Field(default=["Content-Type", "X-Request-ID"])


# --- Main Settings ---


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ARREGISTRY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="ar-terraform-registry")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True, description="JSON logging in production")

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=8080)

    # Backing store
    artifact_registry: ArtifactRegistryConfig = Field(default_factory=ArtifactRegistryConfig)

    # CORS
    cors: CORSConfig = Field(default_factory=CORSConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings sources: env vars override YAML config."""
        return (
            init_settings,
            env_settings,
            yaml_config_settings_source,
            dotenv_settings,
            file_secret_settings,
        )


# Global settings instance
settings = Settings()
