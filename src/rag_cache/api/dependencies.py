"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from rag_cache.config import Settings, settings
from rag_cache.handlers import PipelineHandler
from rag_cache.protocols import Generator
from rag_cache.repositories import GeminiGenerator, KeywordRetriever, OllamaGenerator
from rag_cache.services import PipelineService

logger = logging.getLogger(__name__)


def build_generator(config: Settings = settings) -> Generator:
    """Create the generator selected by GENERATOR_BACKEND.

    Args:
        config: Settings to read the backend choice from

    Returns:
        An OllamaGenerator or GeminiGenerator
    """
    if config.generator_backend == "gemini":
        return GeminiGenerator(
            api_key=config.gemini_api_key,
            model_name=config.gemini_model,
            base_url=config.gemini_base_url,
            timeout=config.generation_timeout,
        )
    return OllamaGenerator(
        model_name=config.generation_model,
        base_url=config.ollama_base_url,
        timeout=config.generation_timeout,
    )


def build_pipeline(config: Settings = settings) -> PipelineService:
    """Create the pipeline service with the configured collaborators."""
    return PipelineService.create(
        retriever=KeywordRetriever.create(),
        generator=build_generator(config),
        capacity=config.cache_capacity,
    )


def get_handler(request: Request) -> PipelineHandler:
    """Dependency injection for PipelineHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The PipelineHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "pipeline_handler", None)
    if handler is None:
        raise RuntimeError("PipelineHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Pipeline service (business logic) - app.state.pipeline_service
    2. Handler (HTTP endpoints) - app.state.pipeline_handler

    Cleanup:
        Closes the generator's HTTP client and removes services from app.state
    """
    pipeline_service = build_pipeline()
    pipeline_handler = PipelineHandler(pipeline_service=pipeline_service)

    pipeline_service.subscribe_evictions(
        lambda key, entry: logger.info("Cache eviction: %s (cached at %.0f)", key, entry.timestamp)
    )

    app.state.pipeline_service = pipeline_service
    app.state.pipeline_handler = pipeline_handler

    logger.info(
        "Pipeline initialized (capacity=%d, generator=%s)",
        pipeline_service.capacity,
        pipeline_service.generator.model_name,
    )

    yield

    close = getattr(pipeline_service.generator, "close", None)
    if close is not None:
        await close()

    del app.state.pipeline_handler
    del app.state.pipeline_service
    logger.info("Pipeline shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[PipelineHandler, Depends(get_handler)]
