"""Configuration model exports.

    from rage.config.models import StorageConfig, UpgradeConfig
"""

from rage.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from rage.config.models.storage import DocumentStoreConfig, StorageConfig
from rage.config.models.upgrade import UpgradeConfig

__all__ = [
    "DocumentStoreConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "StorageConfig",
    "UpgradeConfig",
]
