"""Query result domain entity."""

from dataclasses import dataclass, field
from enum import Enum


class ResponseSource(str, Enum):
    """Where the response returned to the caller came from."""

    CACHE = "cache"
    GENERATED = "generated"
    SYSTEM = "system"


class QueryStage(str, Enum):
    """Stages a query passes through in the pipeline."""

    RETRIEVING = "retrieving"
    KEY_DERIVED = "key_derived"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    GENERATING = "generating"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryResultEntity:
    """Outcome of processing one query.

    Attributes:
        response: Text shown to the caller
        source: Cache hit, fresh generation, or system failure message
        latency_ms: End-to-end latency (0 for failures)
        retrieved_context: Passages retrieved for this request
        cache_key: Fingerprint the request was looked up under
    """

    response: str
    source: ResponseSource
    latency_ms: float
    retrieved_context: list[str] = field(default_factory=list)
    cache_key: str | None = None
