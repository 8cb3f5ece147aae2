"""Tests for the HTTP generation backends."""

import json
from dataclasses import replace

import httpx
import pytest

from rag_cache.exceptions import GenerationError
from rag_cache.repositories import GeminiGenerator, OllamaGenerator
from rag_cache.repositories import gemini_generator as gemini_module


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestOllamaGenerator:
    """Test cases for OllamaGenerator class."""

    @pytest.mark.asyncio
    async def test_generate_posts_non_streaming_request(self):
        """Test the prompt is sent to /api/generate and the text returned."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "LRU evicts the oldest entry."})

        generator = OllamaGenerator(
            model_name="llama3.2",
            base_url="http://ollama.test/",
            client=mock_client(handler),
        )

        text = await generator.generate("Explain LRU")

        assert text == "LRU evicts the oldest entry."
        assert seen["url"] == "http://ollama.test/api/generate"
        assert seen["body"] == {"model": "llama3.2", "prompt": "Explain LRU", "stream": False}
        await generator.close()

    @pytest.mark.asyncio
    async def test_model_not_found_hint(self):
        """Test a 404 is raised as GenerationError with a pull hint."""
        generator = OllamaGenerator(
            model_name="missing-model",
            base_url="http://ollama.test",
            client=mock_client(lambda request: httpx.Response(404)),
        )

        with pytest.raises(GenerationError, match="ollama pull missing-model"):
            await generator.generate("hi")

    @pytest.mark.asyncio
    async def test_connection_refused_hint(self):
        """Test a refused connection mentions starting Ollama."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        generator = OllamaGenerator(base_url="http://ollama.test", client=mock_client(handler))

        with pytest.raises(GenerationError, match="ollama serve"):
            await generator.generate("hi")

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        """Test a payload without a text response is rejected."""
        generator = OllamaGenerator(
            base_url="http://ollama.test",
            client=mock_client(lambda request: httpx.Response(200, json={"error": "nope"})),
        )

        with pytest.raises(GenerationError, match="Unexpected response format"):
            await generator.generate("hi")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """Test a non-JSON body is rejected."""
        generator = OllamaGenerator(
            base_url="http://ollama.test",
            client=mock_client(lambda request: httpx.Response(200, text="not json")),
        )

        with pytest.raises(GenerationError, match="invalid JSON"):
            await generator.generate("hi")

    @pytest.mark.asyncio
    async def test_is_available_matches_latest_tag(self):
        """Test availability accepts the model listed with a :latest tag."""
        tags = {"models": [{"name": "llama3.2:latest"}, {"name": "mistral:7b"}]}
        client = mock_client(lambda request: httpx.Response(200, json=tags))

        assert await OllamaGenerator(model_name="llama3.2", base_url="http://o", client=client).is_available()
        assert not await OllamaGenerator(model_name="phi3", base_url="http://o", client=client).is_available()

    @pytest.mark.asyncio
    async def test_is_available_false_when_unreachable(self):
        """Test availability is False when Ollama cannot be reached."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        generator = OllamaGenerator(base_url="http://ollama.test", client=mock_client(handler))
        assert await generator.is_available() is False


class TestGeminiGenerator:
    """Test cases for GeminiGenerator class."""

    @pytest.mark.asyncio
    async def test_generate_joins_candidate_parts(self):
        """Test text parts of the first candidate are concatenated."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": "LRU "}, {"text": "wins."}]}}]},
            )

        generator = GeminiGenerator(
            api_key="test-key",
            model_name="gemini-3-flash-preview",
            base_url="https://gemini.test",
            client=mock_client(handler),
        )

        text = await generator.generate("Explain LRU")

        assert text == "LRU wins."
        assert seen["path"] == "/v1beta/models/gemini-3-flash-preview:generateContent"
        assert seen["key"] == "test-key"
        assert seen["body"] == {"contents": [{"parts": [{"text": "Explain LRU"}]}]}

    @pytest.mark.asyncio
    async def test_empty_parts_give_empty_text(self):
        """Test a candidate without parts yields an empty string."""
        generator = GeminiGenerator(
            api_key="k",
            base_url="https://gemini.test",
            client=mock_client(
                lambda request: httpx.Response(200, json={"candidates": [{"content": {}}]})
            ),
        )

        assert await generator.generate("hi") == ""

    @pytest.mark.asyncio
    async def test_missing_candidates(self):
        """Test a payload without candidates is rejected."""
        generator = GeminiGenerator(
            api_key="k",
            base_url="https://gemini.test",
            client=mock_client(lambda request: httpx.Response(200, json={"candidates": []})),
        )

        with pytest.raises(GenerationError, match="Unexpected response format"):
            await generator.generate("hi")

    @pytest.mark.asyncio
    async def test_quota_hint(self):
        """Test a 429 is raised as GenerationError with a quota hint."""
        generator = GeminiGenerator(
            api_key="k",
            base_url="https://gemini.test",
            client=mock_client(lambda request: httpx.Response(429)),
        )

        with pytest.raises(GenerationError, match="Quota exceeded"):
            await generator.generate("hi")

    @pytest.mark.asyncio
    async def test_missing_api_key(self, monkeypatch):
        """Test generation fails fast without an API key and makes no request."""
        monkeypatch.setattr(
            gemini_module, "settings", replace(gemini_module.settings, gemini_api_key=None)
        )
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        generator = GeminiGenerator(base_url="https://gemini.test", client=mock_client(handler))

        with pytest.raises(GenerationError, match="API key is not configured"):
            await generator.generate("hi")
        assert await generator.is_available() is False
        assert calls == []

    @pytest.mark.asyncio
    async def test_is_available(self):
        """Test availability follows the model metadata endpoint status."""
        ok = GeminiGenerator(
            api_key="k",
            base_url="https://gemini.test",
            client=mock_client(lambda request: httpx.Response(200, json={"name": "models/x"})),
        )
        forbidden = GeminiGenerator(
            api_key="k",
            base_url="https://gemini.test",
            client=mock_client(lambda request: httpx.Response(403)),
        )

        assert await ok.is_available() is True
        assert await forbidden.is_available() is False
