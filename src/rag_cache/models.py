from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineMetrics:
    """Snapshot of the pipeline's aggregate metrics.

    Counters only grow until an explicit reset. Averages and ratios are
    derived on demand and never stored.
    """

    capacity: int
    total_queries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    eviction_count: int = 0
    total_llm_latency_ms: float = 0.0
    total_cache_latency_ms: float = 0.0
    current_cache_size: int = 0

    @property
    def hit_ratio(self) -> float:
        """Calculate cache hit ratio."""
        if self.total_queries == 0:
            return 0.0
        return self.cache_hits / self.total_queries

    @property
    def avg_cache_latency_ms(self) -> float:
        """Calculate average latency of cache hits."""
        if self.cache_hits == 0:
            return 0.0
        return self.total_cache_latency_ms / self.cache_hits

    @property
    def avg_llm_latency_ms(self) -> float:
        """Calculate average generation latency of cache misses."""
        if self.cache_misses == 0:
            return 0.0
        return self.total_llm_latency_ms / self.cache_misses

    @property
    def avg_latency_ms(self) -> float:
        """Calculate average latency across hits and misses."""
        if self.total_queries == 0:
            return 0.0
        return (self.total_llm_latency_ms + self.total_cache_latency_ms) / self.total_queries

    @property
    def capacity_utilization(self) -> float:
        """Fraction of the cache capacity currently in use."""
        return self.current_cache_size / self.capacity

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_queries": self.total_queries,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "eviction_count": self.eviction_count,
            "total_llm_latency_ms": self.total_llm_latency_ms,
            "total_cache_latency_ms": self.total_cache_latency_ms,
            "current_cache_size": self.current_cache_size,
            "capacity": self.capacity,
            "hit_ratio": self.hit_ratio,
            "avg_cache_latency_ms": self.avg_cache_latency_ms,
            "avg_llm_latency_ms": self.avg_llm_latency_ms,
            "avg_latency_ms": self.avg_latency_ms,
            "capacity_utilization": self.capacity_utilization,
        }
