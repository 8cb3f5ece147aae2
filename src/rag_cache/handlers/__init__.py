"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Retrieval / Generation)
"""

from .pipeline_handler import PipelineHandler

__all__ = [
    "PipelineHandler",
]
