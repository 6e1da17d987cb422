"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Usage:
        from infrastructure.services import get_settings
        settings = get_settings()
        cache_dir = settings.cache.CACHE_DIR

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()
