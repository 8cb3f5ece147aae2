import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rag_cache.api.dependencies import HandlerDep, lifespan
from rag_cache.config import settings
from rag_cache.dto import (
    CacheStatsResponse,
    DocumentItem,
    HealthCheckResponse,
    MetricsResponse,
    QueryRequest,
    QueryResponse,
)

app = FastAPI(
    title="RAG LRU Cache API",
    description="Retrieval-then-generate pipeline with a bounded LRU response cache",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "RAG LRU Cache API",
        "version": "0.1.0",
        "description": "Retrieval-then-generate pipeline with a bounded LRU response cache",
        "endpoints": {
            "query": "/query",
            "metrics": "/metrics",
            "cache": "/cache",
            "documents": "/documents",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/query", response_model=QueryResponse)
async def process_query(request: QueryRequest, handler: HandlerDep) -> QueryResponse:
    """
    Answer a query from the cache or by generation.

    Args:
        request: Query request with the user question.

    Returns:
        The answer, its source and the retrieved context.
    """
    return await handler.process_query(request)


@app.get("/metrics", response_model=MetricsResponse)
async def get_metrics(handler: HandlerDep) -> MetricsResponse:
    """Get aggregate pipeline metrics."""
    return await handler.get_metrics()


@app.get("/cache", response_model=CacheStatsResponse)
async def get_cache(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache size, capacity and recency order."""
    return await handler.get_cache_stats()


@app.delete("/cache", response_model=MetricsResponse)
async def reset_cache(handler: HandlerDep) -> MetricsResponse:
    """Clear the cache and reset metrics."""
    return await handler.reset()


@app.get("/documents", response_model=list[DocumentItem])
async def list_documents(handler: HandlerDep) -> list[DocumentItem]:
    """List the documents available to the retriever."""
    return await handler.list_documents()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "rag_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
