"""Keyword retriever over an in-memory document corpus.

A lightweight stand-in for a real retrieval backend: a document matches
when any query token appears in its title or content. Results keep corpus
order so identical queries always produce identical context.
"""

import logging
import re
from collections.abc import Iterable

from rag_cache.documents import DEFAULT_DOCUMENTS
from rag_cache.entities import Document

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"\W+")


class KeywordRetriever:
    """Substring keyword matching implementation of the Retriever protocol.

    This class satisfies the Retriever protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        retriever = KeywordRetriever.create()
        context = await retriever.retrieve("How does LRU eviction work?")
        ```
    """

    def __init__(self, documents: Iterable[Document] | None = None) -> None:
        """Initialize the retriever.

        Args:
            documents: Corpus to search. Defaults to DEFAULT_DOCUMENTS.
        """
        self._documents: tuple[Document, ...] = (
            tuple(documents) if documents is not None else DEFAULT_DOCUMENTS
        )

    @classmethod
    def create(cls, documents: Iterable[Document] | None = None) -> "KeywordRetriever":
        """Factory method to create KeywordRetriever with defaults.

        Args:
            documents: Corpus to search. If None, uses DEFAULT_DOCUMENTS.

        Returns:
            Configured KeywordRetriever
        """
        return cls(documents=documents)

    @property
    def documents(self) -> tuple[Document, ...]:
        """Get the searchable corpus."""
        return self._documents

    async def retrieve(self, query: str) -> list[str]:
        """Return the content of every document matching a query token.

        Failures while matching are logged and reported as no context.

        Args:
            query: The user query

        Returns:
            Matching document contents in corpus order, possibly empty
        """
        try:
            return self._match(query)
        except Exception:
            logger.exception("Retrieval failed for query %r, continuing without context", query)
            return []

    def _match(self, query: str) -> list[str]:
        tokens = [token for token in _TOKEN_SPLIT.split(query.lower()) if token]
        if not tokens:
            return []

        matches = []
        for document in self._documents:
            content = document.content.lower()
            title = document.title.lower()
            if any(token in content or token in title for token in tokens):
                matches.append(document.content)

        logger.debug("Retrieved %d passage(s) for %d token(s)", len(matches), len(tokens))
        return matches
