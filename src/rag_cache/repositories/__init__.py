"""Repository layer for external collaborators.

This layer wraps retrieval and generation backends behind protocol-based
interfaces. This enables:
- Easy swapping of implementations (keyword -> vector retrieval, Ollama -> Gemini, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from rag_cache.protocols import Generator, Retriever

from .gemini_generator import GeminiGenerator
from .keyword_retriever import KeywordRetriever
from .ollama_generator import OllamaGenerator

__all__ = [
    "Generator",
    "Retriever",
    "GeminiGenerator",
    "KeywordRetriever",
    "OllamaGenerator",
]
