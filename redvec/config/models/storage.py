"""Redis connection and vector index configuration models."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

VectorAlgorithm = Literal["HNSW", "FLAT"]
DistanceMetric = Literal["COSINE", "L2", "IP"]
KeyPolicyType = Literal["uuid", "sequential"]

HNSW_ONLY_FIELDS = ("m", "ef_construction", "ef_runtime")
FLAT_ONLY_FIELDS = ("block_size",)


class RedisConfig(BaseModel):
    """Redis connection configuration.

    Note: credentials belong in the REDIS_URL environment variable,
    NOT in config files.
    """

    url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL (overridden by REDIS_URL env var)",
    )
    socket_timeout: float | None = Field(
        default=30.0,
        gt=0,
        description="Socket timeout in seconds",
    )
    decode_responses: bool = Field(
        default=False,
        description="Decode replies to str (vector blobs stay bytes when False)",
    )


class IndexConfig(BaseModel):
    """Configuration of one RediSearch vector index and its key space."""

    index_name: str = Field(
        default="documents",
        min_length=1,
        description="RediSearch index name",
    )
    key_prefix: str | None = Field(
        default=None,
        description="Key prefix of indexed hashes (defaults to doc:{index_name}:)",
    )
    content_key: str = Field(default="content", description="Hash field holding text")
    metadata_key: str = Field(default="metadata", description="Hash field holding JSON metadata")
    vector_key: str = Field(
        default="content_vector",
        description="Hash field holding float32 vector bytes",
    )

    algorithm: VectorAlgorithm = Field(default="HNSW", description="Index algorithm")
    distance_metric: DistanceMetric = Field(
        default="COSINE",
        description="Distance metric for KNN",
    )
    initial_cap: int | None = Field(default=None, gt=0, description="Initial index capacity")
    m: int | None = Field(default=None, gt=0, description="HNSW max outgoing edges")
    ef_construction: int | None = Field(
        default=None,
        gt=0,
        description="HNSW candidate list size at build time",
    )
    ef_runtime: int | None = Field(
        default=None,
        gt=0,
        description="HNSW candidate list size at query time",
    )
    block_size: int | None = Field(default=None, gt=0, description="FLAT block size")

    default_filter: list[str] | None = Field(
        default=None,
        description="Metadata tags applied to every search (exclusive with per-call filters)",
    )
    batch_size: int = Field(
        default=1000,
        gt=0,
        description="Writes per MULTI/EXEC batch",
    )
    key_policy: KeyPolicyType = Field(
        default="uuid",
        description="How keys are generated when the caller supplies none",
    )

    @model_validator(mode="after")
    def check_algorithm_params(self) -> "IndexConfig":
        """Reject parameters that belong to the other algorithm."""
        foreign = FLAT_ONLY_FIELDS if self.algorithm == "HNSW" else HNSW_ONLY_FIELDS
        for name in foreign:
            if getattr(self, name) is not None:
                raise ValueError(f"'{name}' is not a valid {self.algorithm} parameter")
        return self

    @property
    def prefix(self) -> str:
        """Resolved key prefix."""
        if self.key_prefix is not None:
            return self.key_prefix
        return f"doc:{self.index_name}:"

    def vector_attributes(self, dimensions: int) -> dict[str, Any]:
        """Attributes for the FT.CREATE VECTOR field."""
        attributes: dict[str, Any] = {
            "TYPE": "FLOAT32",
            "DIM": dimensions,
            "DISTANCE_METRIC": self.distance_metric,
        }
        optional = {
            "INITIAL_CAP": self.initial_cap,
            "M": self.m,
            "EF_CONSTRUCTION": self.ef_construction,
            "EF_RUNTIME": self.ef_runtime,
            "BLOCK_SIZE": self.block_size,
        }
        attributes.update({k: v for k, v in optional.items() if v is not None})
        return attributes
