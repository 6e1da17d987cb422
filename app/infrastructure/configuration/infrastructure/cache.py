"""Event cache replay settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class CacheSettings(InfrastructureSettings):
    """Configuration for the on-disk event cache and its replay job.

    Events that could not be delivered are persisted as individual files in
    ``CACHE_DIR``. A replay pass re-delivers them and removes the files that
    no longer need to be kept.

    Environment Variables:
        CACHE_DIR: Directory holding cached events (default: .event-cache)
        CACHE_FILE_SUFFIX: Suffix shared by all cache files (default: .sentry-event)
        REPLAY_ENABLED: Enable the scheduled replay job (default: True)
        REPLAY_ON_STARTUP: Run one replay pass when the job is registered (default: True)
        REPLAY_INTERVAL_SECONDS: Seconds between scheduled passes (default: 300)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.cache.REPLAY_ENABLED:
            directory = settings.cache.CACHE_DIR
            # Schedule replay...
        ```
    """

    CACHE_DIR: str = Field(
        default=".event-cache",
        description="Directory where undelivered events are persisted",
    )
    CACHE_FILE_SUFFIX: str = Field(
        default=".sentry-event",
        description="File name suffix of recognized cache files",
    )
    REPLAY_ENABLED: bool = Field(
        default=True,
        description="Enable the scheduled cache replay job",
    )
    REPLAY_ON_STARTUP: bool = Field(
        default=True,
        description="Run a replay pass as soon as the job is registered",
    )
    REPLAY_INTERVAL_SECONDS: int = Field(
        default=300,
        ge=1,
        description="Interval between scheduled replay passes (seconds, 5 minutes)",
    )

    @field_validator("CACHE_FILE_SUFFIX")
    @classmethod
    def validate_file_suffix(cls, v: str) -> str:
        """Require a dotted, non-empty suffix."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("CACHE_FILE_SUFFIX must start with '.' and not be empty")
        return v
