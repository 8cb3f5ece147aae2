"""Exception types raised by the RAG cache package."""


class RagCacheError(Exception):
    """Base class for errors raised by this package."""


class GenerationError(RagCacheError):
    """Raised by a generator when it cannot produce a complete response.

    Transport, quota, timeout and malformed-payload failures are all
    collapsed into this single signal so the pipeline only has to
    distinguish success from failure.
    """
