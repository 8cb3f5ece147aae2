"""Ollama-based text generator.

Uses Ollama's local API to generate responses. Ollama serves models locally
without API keys.

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull llama3.2`
    - Ollama running: `ollama serve` (usually runs automatically)
"""

import httpx

from rag_cache.config import settings
from rag_cache.exceptions import GenerationError


class OllamaGenerator:
    """Ollama-based implementation of the Generator protocol.

    This class satisfies the Generator protocol through structural
    typing - no explicit inheritance needed.

    Uses the non-streaming endpoint http://localhost:11434/api/generate by
    default, so a response is either complete or an error.

    Example:
        ```python
        generator = OllamaGenerator.create(model_name="llama3.2")
        text = await generator.generate("Explain LRU caching in one line.")
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama generator.

        Args:
            model_name: Name of the Ollama model.
                       Defaults to settings.generation_model.
            base_url: Ollama API base URL.
                     Defaults to settings.ollama_base_url.
            timeout: Request timeout in seconds.
                    Defaults to settings.generation_timeout.
            client: Preconfigured HTTP client. Created lazily if None.
        """
        self._model_name = model_name or settings.generation_model
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._timeout = timeout or settings.generation_timeout
        self._client = client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OllamaGenerator":
        """Factory method to create OllamaGenerator with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: Ollama API URL. If None, uses settings.

        Returns:
            Configured OllamaGenerator
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def model_name(self) -> str:
        """Get the model name/identifier.

        Returns:
            Model name (e.g., "llama3.2")
        """
        return self._model_name

    async def generate(self, prompt: str) -> str:
        """Generate a response for a prompt.

        Args:
            prompt: The rendered prompt

        Returns:
            The generated text

        Raises:
            GenerationError: If the Ollama API request fails or returns
                an unexpected payload
        """
        url = f"{self._base_url}/api/generate"
        payload = {
            "model": self._model_name,
            "prompt": prompt,
            "stream": False,
        }

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if "connection refused" in str(e).lower():
                error_msg += "\n  → Is Ollama running? Try: ollama serve"
            elif isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 404:
                error_msg += f"\n  → Model not found. Try: ollama pull {self._model_name}"
            raise GenerationError(error_msg) from e
        except ValueError as e:
            raise GenerationError(f"Ollama returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            raise GenerationError(f"Unexpected response format: {data}")

        return data["response"]

    async def is_available(self) -> bool:
        """Check if Ollama is running and serving this model.

        Returns:
            True if the model is listed by Ollama, False otherwise
        """
        try:
            response = await self.client.get(f"{self._base_url}/api/tags")
            response.raise_for_status()
            models = response.json().get("models", [])
        except (httpx.HTTPError, ValueError, AttributeError):
            return False

        names = {model.get("name", "") for model in models if isinstance(model, dict)}
        return self._model_name in names or f"{self._model_name}:latest" in names

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
