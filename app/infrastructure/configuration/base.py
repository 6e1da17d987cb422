"""Shared base classes and utilities for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class InfrastructureSettings(BaseSettings):
    """Base class for infrastructure-level settings.

    Infrastructure settings control core system behavior like the event
    cache location and the replay schedule. Subclasses share env file
    loading and case-sensitive variable names.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
