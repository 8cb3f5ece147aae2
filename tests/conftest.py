"""Shared fixtures and fake collaborators for the test suite."""

import asyncio
import time

import pytest

from rag_cache.entities import CacheEntryEntity
from rag_cache.exceptions import GenerationError


class FakeRetriever:
    """Retriever returning a fixed context per query."""

    def __init__(self, contexts: dict[str, list[str]] | None = None) -> None:
        self.contexts = contexts or {}
        self.calls: list[str] = []

    async def retrieve(self, query: str) -> list[str]:
        self.calls.append(query)
        return list(self.contexts.get(query, []))


class FakeGenerator:
    """Generator that echoes a canned answer and records prompts."""

    def __init__(
        self,
        response: str = "LRU removes the least recently used entry.",
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []
        self.available = True

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response

    async def is_available(self) -> bool:
        return self.available


def make_entry(key: str, response: str | None = None) -> CacheEntryEntity:
    return CacheEntryEntity(
        key=key,
        response=response or f"response for {key}",
        context=(f"context for {key}",),
        timestamp=time.time(),
    )


@pytest.fixture
def retriever():
    return FakeRetriever({"What is LRU?": ["LRU evicts oldest..."]})


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=GenerationError("quota exceeded"))
