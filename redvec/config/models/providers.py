"""Embedding provider configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

EmbeddingProviderType = Literal["openai", "mock"]


class EmbeddingConfig(BaseModel):
    """Configuration for the embedding provider.

    Note: API keys come from environment variables (OPENAI_API_KEY).
    """

    provider: EmbeddingProviderType = Field(
        default="openai",
        description="Embedding provider (openai, mock)",
    )
    model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model identifier",
    )
    dimensions: int | None = Field(
        default=None,
        gt=0,
        description="Output dimensions (provider default if unset)",
    )
    timeout: float = Field(
        default=60.0,
        gt=0,
        description="Request timeout in seconds",
    )
