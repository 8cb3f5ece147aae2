"""
Tests for the RAG LRU cache API.
"""

import pytest
from fastapi.testclient import TestClient

from rag_cache.api import dependencies
from rag_cache.api.app import app
from rag_cache.exceptions import GenerationError
from rag_cache.keys import derive_cache_key
from rag_cache.repositories import KeywordRetriever
from rag_cache.services import FAILURE_MESSAGE, PipelineService
from tests.conftest import FakeGenerator


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def client(monkeypatch, fake_generator):
    """Create a test client backed by the keyword retriever and a fake generator."""
    monkeypatch.setattr(
        dependencies,
        "build_pipeline",
        lambda: PipelineService.create(
            retriever=KeywordRetriever.create(),
            generator=fake_generator,
            capacity=2,
        ),
    )
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "RAG LRU Cache API"
    assert "query" in data["endpoints"]


def test_health(client, fake_generator):
    """Test health check reports generator reachability."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "generator_healthy": True,
        "generator_model": "fake-model",
    }

    fake_generator.available = False
    assert client.get("/health").json()["status"] == "unhealthy"


def test_query_miss_then_hit(client, fake_generator):
    """Test a repeated query is generated once and then served from cache."""
    first = client.post("/query", json={"query": "How does LRU eviction work?"})
    second = client.post("/query", json={"query": "How does LRU eviction work?"})

    assert first.status_code == 200
    assert second.status_code == 200
    first_data, second_data = first.json(), second.json()

    assert first_data["source"] == "generated"
    assert second_data["source"] == "cache"
    assert second_data["response"] == first_data["response"]
    assert first_data["cache_key"] == derive_cache_key(
        "How does LRU eviction work?", first_data["retrieved_context"]
    )
    assert len(fake_generator.prompts) == 1


def test_query_generation_failure(client, fake_generator):
    """Test a generation failure is a normal response with source=system."""
    fake_generator.error = GenerationError("quota exceeded")

    response = client.post("/query", json={"query": "What is Gemini?"})

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "system"
    assert data["response"] == FAILURE_MESSAGE
    assert data["latency_ms"] == 0
    assert data["cache_key"] is None


def test_query_accepts_empty_text(client):
    """Test an empty query is processed rather than rejected."""
    response = client.post("/query", json={"query": ""})
    assert response.status_code == 200
    assert response.json()["retrieved_context"] == []


def test_query_requires_body(client):
    """Test a missing query field is a validation error."""
    response = client.post("/query", json={})
    assert response.status_code == 422


def test_metrics(client):
    """Test metrics reflect processed queries."""
    client.post("/query", json={"query": "vault"})
    client.post("/query", json={"query": "vault"})

    response = client.get("/metrics")
    assert response.status_code == 200
    data = response.json()
    assert data["total_queries"] == 2
    assert data["cache_hits"] == 1
    assert data["cache_misses"] == 1
    assert data["hit_ratio"] == 0.5
    assert data["capacity"] == 2
    assert data["current_cache_size"] == 1


def test_cache_eviction_visible(client):
    """Test the cache endpoint shows recency order after an eviction."""
    for query in ("vault", "gemini", "architecture"):
        client.post("/query", json={"query": query})

    response = client.get("/cache")
    assert response.status_code == 200
    data = response.json()
    assert data["size"] == 2
    assert data["capacity"] == 2
    assert data["utilization"] == 1.0
    assert len(data["keys"]) == 2
    assert client.get("/metrics").json()["eviction_count"] == 1


def test_reset_cache(client):
    """Test DELETE /cache empties the cache and zeroes metrics."""
    client.post("/query", json={"query": "vault"})

    response = client.delete("/cache")
    assert response.status_code == 200
    assert response.json()["total_queries"] == 0
    assert client.get("/cache").json()["size"] == 0


def test_list_documents(client):
    """Test the document corpus is listed."""
    response = client.get("/documents")
    assert response.status_code == 200
    data = response.json()
    assert [doc["id"] for doc in data] == ["1", "2", "3", "4"]
    assert data[0]["title"] == "Cache Strategy"
