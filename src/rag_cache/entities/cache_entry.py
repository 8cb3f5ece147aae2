"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached generation result.

    Entries are owned by the cache once inserted and never mutated; a second
    insertion under the same key replaces the entry wholesale.

    Attributes:
        key: Fingerprint of the query and its context
        response: The generated text
        context: Retrieved passages the response was generated from
        timestamp: When this entry was created (Unix timestamp)
    """

    key: str
    response: str
    context: tuple[str, ...]
    timestamp: float
