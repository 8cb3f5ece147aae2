"""Metrics aggregation for the pipeline.

The aggregator is the single owner of the pipeline's metrics. Every change
goes through ``_commit``, which swaps in a new immutable snapshot under a
lock and publishes it to subscribers.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace

from rag_cache.models import PipelineMetrics

logger = logging.getLogger(__name__)

MetricsListener = Callable[[PipelineMetrics], None]


class MetricsAggregator:
    """Owns and updates the pipeline's ``PipelineMetrics`` snapshot.

    Example:
        ```python
        aggregator = MetricsAggregator(capacity=8)
        aggregator.subscribe(lambda m: print(m.hit_ratio))
        aggregator.record_hit(latency_ms=3.2, cache_size=1)
        ```
    """

    def __init__(self, capacity: int) -> None:
        """Initialize the aggregator.

        Args:
            capacity: Cache capacity reported alongside the counters.
        """
        self._capacity = capacity
        self._snapshot = PipelineMetrics(capacity=capacity)
        self._listeners: list[MetricsListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: MetricsListener) -> None:
        """Register a callback that receives every published snapshot."""
        self._listeners.append(listener)

    def snapshot(self) -> PipelineMetrics:
        """Return the current snapshot."""
        with self._lock:
            return self._snapshot

    def record_hit(self, latency_ms: float, cache_size: int) -> PipelineMetrics:
        """Record a query answered from the cache."""
        return self._commit(
            lambda m: replace(
                m,
                total_queries=m.total_queries + 1,
                cache_hits=m.cache_hits + 1,
                total_cache_latency_ms=m.total_cache_latency_ms + latency_ms,
                current_cache_size=cache_size,
            )
        )

    def record_miss(self, generation_latency_ms: float, cache_size: int) -> PipelineMetrics:
        """Record a query answered by a successful generation."""
        return self._commit(
            lambda m: replace(
                m,
                total_queries=m.total_queries + 1,
                cache_misses=m.cache_misses + 1,
                total_llm_latency_ms=m.total_llm_latency_ms + generation_latency_ms,
                current_cache_size=cache_size,
            )
        )

    def record_failure(self, cache_size: int) -> PipelineMetrics:
        """Record a failed generation. Only the cache size changes."""
        return self._commit(lambda m: replace(m, current_cache_size=cache_size))

    def record_eviction(self) -> PipelineMetrics:
        """Count one capacity eviction.

        Not published on its own; the snapshot published when the query
        that caused the eviction completes includes it.
        """
        return self._commit(
            lambda m: replace(m, eviction_count=m.eviction_count + 1),
            publish=False,
        )

    def reset(self) -> PipelineMetrics:
        """Zero every counter and publish the fresh snapshot."""
        logger.info("Resetting pipeline metrics")
        return self._commit(lambda m: PipelineMetrics(capacity=self._capacity))

    def _commit(
        self,
        update: Callable[[PipelineMetrics], PipelineMetrics],
        publish: bool = True,
    ) -> PipelineMetrics:
        with self._lock:
            self._snapshot = update(self._snapshot)
            snapshot = self._snapshot

        if publish:
            for listener in list(self._listeners):
                try:
                    listener(snapshot)
                except Exception:
                    logger.exception("Metrics listener failed")
        return snapshot
