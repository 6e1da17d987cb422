"""Infrastructure modules for the event cache application.

Centralized infrastructure components:
- configuration: Settings management (settings, CacheSettings)
- logging: Structured logging (get_module_logger, get_null_logger)
- operations: Uniform operation results
- services: Provider functions (get_settings)
"""

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger, get_null_logger
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus
from infrastructure.services import get_settings

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    "get_null_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
    # Services
    "get_settings",
]
