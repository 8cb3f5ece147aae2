"""Generator protocol.

Defines the interface for any text generation backend that answers a
fully rendered prompt.

Implementations can include:
- Ollama (local, default)
- Google Gemini (API)
- OpenAI-compatible chat completion APIs
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Generator(Protocol):
    """Protocol for text generation services.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model.

        Returns:
            Model name or identifier
        """
        ...

    async def generate(self, prompt: str) -> str:
        """Generate a response for a prompt.

        Any failure (transport, quota, timeout, malformed payload) must be
        raised as a single exception. Partial output is never returned.

        Args:
            prompt: The rendered prompt

        Returns:
            The generated text
        """
        ...

    async def is_available(self) -> bool:
        """Check if the generator is reachable.

        Returns:
            True if available, False otherwise
        """
        ...
