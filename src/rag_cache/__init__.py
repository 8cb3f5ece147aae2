"""RAG Cache - Retrieval-then-generate pipeline with a bounded LRU response cache.

This package provides a layered architecture:

Layers:
    - keys / cache: Key derivation and the fixed-capacity LRU cache
    - protocols: Interface contracts (Retriever, Generator)
    - repositories: Retrieval and generation implementations
    - services: Pipeline orchestration and metrics
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from rag_cache import KeywordRetriever, OllamaGenerator, PipelineService

    pipeline = PipelineService.create(
        retriever=KeywordRetriever.create(),
        generator=OllamaGenerator.create(),
    )
    result = await pipeline.process_query("What is LRU?")
    ```

For HTTP API:
    ```python
    from rag_cache.api.app import app
    ```
"""

from rag_cache.cache import LRUCache
from rag_cache.config import settings
from rag_cache.entities import CacheEntryEntity, Document, QueryResultEntity, ResponseSource
from rag_cache.exceptions import GenerationError, RagCacheError
from rag_cache.keys import derive_cache_key
from rag_cache.models import PipelineMetrics
from rag_cache.protocols import Generator, Retriever
from rag_cache.repositories import GeminiGenerator, KeywordRetriever, OllamaGenerator
from rag_cache.services import MetricsAggregator, PipelineService

__all__ = [
    # Configuration
    "settings",
    # Core
    "LRUCache",
    "derive_cache_key",
    # Protocols (interfaces)
    "Generator",
    "Retriever",
    # Services (business logic)
    "PipelineService",
    "MetricsAggregator",
    # Repositories (collaborators)
    "KeywordRetriever",
    "OllamaGenerator",
    "GeminiGenerator",
    # Entities and models
    "CacheEntryEntity",
    "Document",
    "QueryResultEntity",
    "ResponseSource",
    "PipelineMetrics",
    # Errors
    "RagCacheError",
    "GenerationError",
]
