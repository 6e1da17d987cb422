"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    CacheSettings: Event cache settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    cache_dir = settings.cache.CACHE_DIR
    suffix = settings.cache.CACHE_FILE_SUFFIX
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure.cache import CacheSettings

__all__ = ["Settings", "settings", "CacheSettings"]
