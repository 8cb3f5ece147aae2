"""Protocol interfaces for swappable collaborators.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (keyword -> vector retrieval, Ollama -> Gemini, etc.)
- Unit testing with fake implementations
- Clear separation between the cache core and external backends

Usage:
    ```python
    from rag_cache.protocols import Generator, Retriever

    generator: Generator = OllamaGenerator.create()
    retriever: Retriever = KeywordRetriever.create()
    ```
"""

from .generator import Generator
from .retriever import Retriever

__all__ = [
    "Generator",
    "Retriever",
]
