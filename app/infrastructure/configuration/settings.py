"""Event cache configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.infrastructure import CacheSettings


class Settings(BaseSettings):
    """Application configuration settings - main aggregator.

    Aggregates the domain-specific settings into a single configuration
    object. Only the cache replay infrastructure is configurable today.

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        cache_dir = settings.cache.CACHE_DIR

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Infrastructure settings
    cache: CacheSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "cache": CacheSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
