"""Default document corpus served by the keyword retriever."""

from rag_cache.entities import Document

DEFAULT_DOCUMENTS: tuple[Document, ...] = (
    Document(
        id="1",
        title="Cache Strategy",
        content=(
            "LRU eviction is better than TTL for RAG pipelines because it maintains "
            "high-frequency context regardless of time, preventing valid context from "
            "expiring just because it is old."
        ),
    ),
    Document(
        id="2",
        title="System Architecture",
        content=(
            "The Vault system uses a multi-tier caching layer where keys are derived "
            "from the hash of the query and the retrieved context combined."
        ),
    ),
    Document(
        id="3",
        title="Gemini 3 Pro",
        content=(
            "Gemini 3 Pro is a state-of-the-art multimodal model optimized for complex "
            "reasoning and long-context RAG applications."
        ),
    ),
    Document(
        id="4",
        title="Retrieval Quality",
        content=(
            "Retrieval quality in RAG is measured by faithfulness and relevance. Our "
            "system uses semantic chunking to ensure context integrity."
        ),
    ),
)
