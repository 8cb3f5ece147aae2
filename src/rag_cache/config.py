import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

GENERATOR_BACKENDS = ("ollama", "gemini")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_capacity: int = int(os.getenv("CACHE_CAPACITY", "8"))

    # Generation
    generator_backend: str = os.getenv("GENERATOR_BACKEND", "ollama")
    generation_model: str = os.getenv("GENERATION_MODEL", "llama3.2")
    generation_timeout: float = float(os.getenv("GENERATION_TIMEOUT", "60"))

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    # Gemini
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"
    )

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_capacity <= 0:
            raise ValueError(f"CACHE_CAPACITY must be a positive integer, got {self.cache_capacity}")

        if self.generator_backend not in GENERATOR_BACKENDS:
            raise ValueError(
                f"GENERATOR_BACKEND must be one of {list(GENERATOR_BACKENDS)}, "
                f"got {self.generator_backend!r}"
            )

        if self.generation_timeout <= 0:
            raise ValueError("GENERATION_TIMEOUT must be greater than 0")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
