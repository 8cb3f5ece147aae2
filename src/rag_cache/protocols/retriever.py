"""Retriever protocol.

Defines the interface for any retrieval backend that turns a query into
supporting context passages.

Implementations can include:
- Keyword matching over an in-memory corpus (default)
- Vector stores (Chroma, Qdrant, pgvector, ...)
- Hybrid BM25 + embedding search
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Retriever(Protocol):
    """Protocol for retrieval backends.

    A retriever must not cache or deduplicate results; the pipeline owns
    all caching. Retrieval failures should be normalized to an empty list
    rather than raised.
    """

    async def retrieve(self, query: str) -> list[str]:
        """Retrieve context passages for a query.

        Args:
            query: The user query

        Returns:
            Context passages, possibly empty
        """
        ...
