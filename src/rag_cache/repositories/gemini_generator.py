"""Google Gemini text generator.

Calls the Gemini REST API (``models/{model}:generateContent``) directly
over HTTP.

Requires:
    GEMINI_API_KEY (or API_KEY) set in the environment or .env file
"""

from typing import Any

import httpx

from rag_cache.config import settings
from rag_cache.exceptions import GenerationError


class GeminiGenerator:
    """Google Gemini implementation of the Generator protocol.

    This class satisfies the Generator protocol through structural
    typing - no explicit inheritance needed.

    Default model: gemini-3-flash-preview

    Example:
        ```python
        generator = GeminiGenerator.create(api_key="...")
        text = await generator.generate("Explain LRU caching in one line.")
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini generator.

        Args:
            api_key: Gemini API key. Defaults to settings.gemini_api_key.
            model_name: Gemini model name. Defaults to settings.gemini_model.
            base_url: API base URL. Defaults to settings.gemini_base_url.
            timeout: Request timeout in seconds.
                    Defaults to settings.generation_timeout.
            client: Preconfigured HTTP client. Created lazily if None.
        """
        self._api_key = api_key or settings.gemini_api_key
        self._model_name = model_name or settings.gemini_model
        self._base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self._timeout = timeout or settings.generation_timeout
        self._client = client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "GeminiGenerator":
        """Factory method to create GeminiGenerator with defaults.

        Args:
            api_key: API key. If None, uses settings.
            model_name: Model name. If None, uses settings.

        Returns:
            Configured GeminiGenerator
        """
        return cls(api_key=api_key, model_name=model_name)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    async def generate(self, prompt: str) -> str:
        """Generate a response for a prompt.

        Args:
            prompt: The rendered prompt

        Returns:
            The text of the first candidate (may be empty)

        Raises:
            GenerationError: If no API key is configured, the request fails,
                or the payload has no candidate
        """
        if not self._api_key:
            raise GenerationError("Gemini API key is not configured. Set GEMINI_API_KEY.")

        url = f"{self._base_url}/v1beta/models/{self._model_name}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = await self.client.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self._api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            error_msg = f"Gemini API error: {e}"
            if isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 429:
                error_msg += "\n  → Quota exceeded. Retry later or check your plan."
            raise GenerationError(error_msg) from e
        except ValueError as e:
            raise GenerationError(f"Gemini returned invalid JSON: {e}") from e

        return self._extract_text(data)

    async def is_available(self) -> bool:
        """Check if the configured model can be reached with the API key.

        Returns:
            True if the model metadata endpoint answers, False otherwise
        """
        if not self._api_key:
            return False
        try:
            response = await self.client.get(
                f"{self._base_url}/v1beta/models/{self._model_name}",
                headers={"x-goog-api-key": self._api_key},
            )
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _extract_text(data: Any) -> str:
        try:
            parts = data["candidates"][0]["content"].get("parts", [])
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise GenerationError(f"Unexpected response format: {data}") from e
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))
