"""Pipeline service for core business logic.

This service orchestrates one query end to end by coordinating the
retriever, the key deriver, the LRU cache and the generator, and owns the
aggregate metrics.

Stages per query:
    RETRIEVING -> KEY_DERIVED -> CACHE_HIT -> COMPLETE
    RETRIEVING -> KEY_DERIVED -> CACHE_MISS -> GENERATING -> COMPLETE | FAILED
"""

import asyncio
import logging
import time
from dataclasses import replace

from rag_cache.cache import EvictionListener, LRUCache
from rag_cache.config import settings
from rag_cache.entities import CacheEntryEntity, QueryResultEntity, QueryStage, ResponseSource
from rag_cache.keys import derive_cache_key
from rag_cache.models import PipelineMetrics
from rag_cache.prompts import build_generation_prompt
from rag_cache.protocols import Generator, Retriever
from rag_cache.services.metrics_aggregator import MetricsAggregator, MetricsListener

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "An error occurred while processing your request."
EMPTY_RESPONSE_FALLBACK = "I couldn't generate a response."


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class PipelineService:
    """Retrieval-then-generate orchestration with an LRU response cache.

    This service depends on PROTOCOLS, not concrete implementations:
    - Retriever: keyword corpus, vector store, hybrid search, etc.
    - Generator: Ollama, Gemini, any chat completion API

    Generation failures never escape ``process_query``; they are turned
    into a ``ResponseSource.SYSTEM`` result and leave the cache and the
    hit/miss counters untouched.

    Example:
        ```python
        from rag_cache.repositories import KeywordRetriever, OllamaGenerator
        from rag_cache.services import PipelineService

        pipeline = PipelineService.create(
            retriever=KeywordRetriever.create(),
            generator=OllamaGenerator.create(),
            capacity=8,
        )
        result = await pipeline.process_query("What is LRU?")
        print(result.source, result.latency_ms)
        ```
    """

    def __init__(
        self,
        retriever: Retriever,
        generator: Generator,
        capacity: int | None = None,
    ) -> None:
        """Initialize the pipeline service.

        Args:
            retriever: Context retrieval backend (required).
            generator: Text generation backend (required).
            capacity: Maximum number of cached responses. Defaults to settings.

        Raises:
            ValueError: If capacity is not a positive integer.
        """
        capacity = settings.cache_capacity if capacity is None else capacity

        self._retriever = retriever
        self._generator = generator
        self._cache = LRUCache(capacity, on_eviction=self._handle_eviction)
        self._metrics = MetricsAggregator(capacity)
        self._eviction_listeners: list[EvictionListener] = []
        self._inflight: set[asyncio.Task] = set()

    @classmethod
    def create(
        cls,
        retriever: Retriever,
        generator: Generator,
        capacity: int | None = None,
    ) -> "PipelineService":
        """Factory method to create PipelineService with sensible defaults.

        Args:
            retriever: Context retrieval backend (required).
            generator: Text generation backend (required).
            capacity: Cache capacity. If None, uses settings.

        Returns:
            Configured PipelineService instance
        """
        return cls(retriever=retriever, generator=generator, capacity=capacity)

    async def process_query(self, query: str) -> QueryResultEntity:
        """Answer a query from the cache or by generating a fresh response.

        Business logic:
        1. Retrieve context for the query (empty context is valid)
        2. Derive the cache key from query + context
        3. On a hit, return the cached response
        4. On a miss, generate, cache the response and return it

        Args:
            query: The user query. Empty queries are not rejected.

        Returns:
            QueryResultEntity describing the response and where it came from
        """
        start = time.perf_counter()

        self._enter(QueryStage.RETRIEVING)
        context = list(await self._retriever.retrieve(query))

        key = derive_cache_key(query, context)
        self._enter(QueryStage.KEY_DERIVED, key)

        entry = self._cache.get(key)
        if entry is not None:
            latency_ms = _elapsed_ms(start)
            self._enter(QueryStage.CACHE_HIT, key)
            self._metrics.record_hit(latency_ms, self._cache.size())
            self._enter(QueryStage.COMPLETE, key)
            return QueryResultEntity(
                response=entry.response,
                source=ResponseSource.CACHE,
                latency_ms=latency_ms,
                retrieved_context=context,
                cache_key=key,
            )

        self._enter(QueryStage.CACHE_MISS, key)

        # A caller cancelling mid-generation must not interrupt the call;
        # its outcome still lands in the cache and the metrics.
        task = asyncio.ensure_future(self._generate_and_store(query, context, key, start))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return await asyncio.shield(task)

    async def _generate_and_store(
        self,
        query: str,
        context: list[str],
        key: str,
        start: float,
    ) -> QueryResultEntity:
        generation_start = time.perf_counter()
        self._enter(QueryStage.GENERATING, key)
        prompt = build_generation_prompt(query, context)

        try:
            response = await self._generator.generate(prompt)
        except Exception:
            logger.exception("Generation failed for cache key %s", key)
            self._enter(QueryStage.FAILED, key)
            self._metrics.record_failure(self._cache.size())
            return QueryResultEntity(
                response=FAILURE_MESSAGE,
                source=ResponseSource.SYSTEM,
                latency_ms=0.0,
                retrieved_context=[],
            )

        response = response or EMPTY_RESPONSE_FALLBACK
        self._cache.put(
            key,
            CacheEntryEntity(
                key=key,
                response=response,
                context=tuple(context),
                timestamp=time.time(),
            ),
        )

        end = time.perf_counter()
        latency_ms = (end - start) * 1000
        generation_latency_ms = (end - generation_start) * 1000
        self._metrics.record_miss(generation_latency_ms, self._cache.size())
        self._enter(QueryStage.COMPLETE, key)

        return QueryResultEntity(
            response=response,
            source=ResponseSource.GENERATED,
            latency_ms=latency_ms,
            retrieved_context=context,
            cache_key=key,
        )

    def get_metrics(self) -> PipelineMetrics:
        """Get the current metrics with an up-to-date cache size."""
        return replace(self._metrics.snapshot(), current_cache_size=self._cache.size())

    def reset(self) -> PipelineMetrics:
        """Clear the cache and zero the metrics.

        Clearing is a reset, so no eviction notifications are sent.

        Returns:
            The fresh metrics snapshot
        """
        self._cache.clear()
        logger.info("Pipeline cache cleared")
        return self._metrics.reset()

    def subscribe_metrics(self, listener: MetricsListener) -> None:
        """Register a callback invoked after every completed or failed query."""
        self._metrics.subscribe(listener)

    def subscribe_evictions(self, listener: EvictionListener) -> None:
        """Register a callback invoked for every capacity eviction."""
        self._eviction_listeners.append(listener)

    async def is_healthy(self) -> bool:
        """Check if the generator is reachable.

        Returns:
            True if the generator reports itself available
        """
        return await self._generator.is_available()

    def _handle_eviction(self, key: str, entry: CacheEntryEntity) -> None:
        self._metrics.record_eviction()
        for listener in list(self._eviction_listeners):
            try:
                listener(key, entry)
            except Exception:
                logger.exception("Eviction listener failed for cache key %s", key)

    def _enter(self, stage: QueryStage, key: str | None = None) -> None:
        logger.debug("Query stage -> %s (key=%s)", stage.value, key)

    @property
    def cache(self) -> LRUCache:
        """Get the underlying cache (for inspection and testing)."""
        return self._cache

    @property
    def capacity(self) -> int:
        """Get the cache capacity."""
        return self._cache.capacity

    @property
    def retriever(self) -> Retriever:
        """Get the underlying retriever."""
        return self._retriever

    @property
    def generator(self) -> Generator:
        """Get the underlying generator."""
        return self._generator
