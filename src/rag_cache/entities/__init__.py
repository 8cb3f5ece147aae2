"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by the cache, the
pipeline service and the repositories. They are NOT used for API
contracts - use DTOs from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .document import Document
from .query_result import QueryResultEntity, QueryStage, ResponseSource

__all__ = [
    "CacheEntryEntity",
    "Document",
    "QueryResultEntity",
    "QueryStage",
    "ResponseSource",
]
