"""Service layer for business logic.

This layer contains the core orchestration. Services depend on protocols
(interfaces), not concrete implementations, making them testable and
flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Retrieval / Generation)

Usage:
    ```python
    from rag_cache.services import PipelineService

    pipeline = PipelineService.create(retriever=retriever, generator=generator)
    result = await pipeline.process_query("What is LRU?")
    ```
"""

from .metrics_aggregator import MetricsAggregator
from .pipeline_service import EMPTY_RESPONSE_FALLBACK, FAILURE_MESSAGE, PipelineService

__all__ = [
    "EMPTY_RESPONSE_FALLBACK",
    "FAILURE_MESSAGE",
    "MetricsAggregator",
    "PipelineService",
]
