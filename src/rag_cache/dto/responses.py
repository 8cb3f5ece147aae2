"""Response DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class QueryResponse(BaseModel):
    """Response DTO for a processed query."""

    response: str = Field(..., description="Answer text or failure message")
    source: Literal["cache", "generated", "system"] = Field(
        ...,
        description="cache = LRU hit, generated = fresh generation, system = generation failed",
    )
    latency_ms: float = Field(..., description="End-to-end latency in milliseconds (0 on failure)", ge=0.0)
    retrieved_context: list[str] = Field(
        default_factory=list,
        description="Passages retrieved for this query",
    )
    cache_key: str | None = Field(None, description="Fingerprint of query + context")


class MetricsResponse(BaseModel):
    """Response DTO for pipeline metrics."""

    total_queries: int = Field(..., ge=0)
    cache_hits: int = Field(..., ge=0)
    cache_misses: int = Field(..., ge=0)
    eviction_count: int = Field(..., ge=0)
    total_llm_latency_ms: float = Field(..., description="Sum of generation latencies", ge=0.0)
    total_cache_latency_ms: float = Field(..., description="Sum of cache hit latencies", ge=0.0)
    current_cache_size: int = Field(..., ge=0)
    capacity: int = Field(..., gt=0)
    hit_ratio: float = Field(..., description="cache_hits / total_queries", ge=0.0, le=1.0)
    avg_cache_latency_ms: float = Field(..., ge=0.0)
    avg_llm_latency_ms: float = Field(..., ge=0.0)
    avg_latency_ms: float = Field(..., ge=0.0)
    capacity_utilization: float = Field(..., ge=0.0, le=1.0)


class CacheStatsResponse(BaseModel):
    """Response DTO for cache contents."""

    size: int = Field(..., description="Number of cached entries", ge=0)
    capacity: int = Field(..., description="Maximum number of entries", gt=0)
    utilization: float = Field(..., description="size / capacity", ge=0.0, le=1.0)
    keys: list[str] = Field(
        default_factory=list,
        description="Cached keys from least to most recently used",
    )


class DocumentItem(BaseModel):
    """Single document served by the retriever."""

    id: str
    title: str
    content: str


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    generator_healthy: bool = Field(..., description="Whether the generation backend is reachable")
    generator_model: str = Field(..., description="Model used for generation")
