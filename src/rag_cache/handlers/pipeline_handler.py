"""HTTP handlers for pipeline operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from rag_cache.dto import (
    CacheStatsResponse,
    DocumentItem,
    HealthCheckResponse,
    MetricsResponse,
    QueryRequest,
    QueryResponse,
)
from rag_cache.models import PipelineMetrics
from rag_cache.services import PipelineService


def _to_metrics_response(metrics: PipelineMetrics) -> MetricsResponse:
    return MetricsResponse(**metrics.to_dict())


class PipelineHandler:
    """HTTP handlers for pipeline operations.

    This handler delegates business logic to PipelineService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses

    Generation failures are not HTTP errors: the service already turns
    them into a ``source="system"`` response.
    """

    def __init__(self, pipeline_service: PipelineService) -> None:
        """Initialize the pipeline handler.

        Args:
            pipeline_service: The pipeline service for business logic (required).
        """
        self._pipeline = pipeline_service

    async def process_query(self, request: QueryRequest) -> QueryResponse:
        """Handle POST /query requests.

        Args:
            request: The query request DTO

        Returns:
            QueryResponse with the answer and its source

        Raises:
            HTTPException: If retrieval or caching fails unexpectedly
        """
        try:
            result = await self._pipeline.process_query(request.query)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to process query: {e}",
            ) from e

        return QueryResponse(
            response=result.response,
            source=result.source.value,
            latency_ms=result.latency_ms,
            retrieved_context=result.retrieved_context,
            cache_key=result.cache_key,
        )

    async def get_metrics(self) -> MetricsResponse:
        """Handle GET /metrics requests."""
        return _to_metrics_response(self._pipeline.get_metrics())

    async def get_cache_stats(self) -> CacheStatsResponse:
        """Handle GET /cache requests.

        Returns:
            CacheStatsResponse with size, capacity and recency order
        """
        cache = self._pipeline.cache
        size = cache.size()
        return CacheStatsResponse(
            size=size,
            capacity=cache.capacity,
            utilization=size / cache.capacity,
            keys=cache.keys(),
        )

    async def reset(self) -> MetricsResponse:
        """Handle DELETE /cache requests.

        Returns:
            The zeroed metrics
        """
        try:
            metrics = self._pipeline.reset()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to reset pipeline: {e}",
            ) from e
        return _to_metrics_response(metrics)

    async def list_documents(self) -> list[DocumentItem]:
        """Handle GET /documents requests.

        Returns:
            The retriever's corpus, or an empty list if it exposes none
        """
        documents = getattr(self._pipeline.retriever, "documents", ())
        return [
            DocumentItem(id=doc.id, title=doc.title, content=doc.content) for doc in documents
        ]

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with generator reachability
        """
        is_healthy = await self._pipeline.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            generator_healthy=is_healthy,
            generator_model=self._pipeline.generator.model_name,
        )
