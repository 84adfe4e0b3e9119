"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

DocumentBackendType = Literal["inmemory", "mongodb"]


class DocumentStoreConfig(BaseModel):
    """Configuration for the document store holding games, classes and activities."""

    backend: DocumentBackendType = Field(
        default="mongodb",
        description="Backend type",
    )
    connection_url: str = Field(
        default="mongodb://localhost:27017",
        description="Connection URL",
    )
    database: str = Field(
        default="analytics-backend",
        min_length=1,
        description="Database name",
    )
    server_selection_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="How long the driver waits for a reachable server",
    )


class StorageConfig(BaseModel):
    """Storage configuration for all backends."""

    documents: DocumentStoreConfig = Field(
        default_factory=DocumentStoreConfig,
        description="Document store configuration",
    )
