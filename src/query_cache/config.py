import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Exact cache (seconds)
    query_result_ttl: int = int(os.getenv("QUERY_RESULT_TTL", "1800"))  # 30 min
    query_result_sliding: int = int(os.getenv("QUERY_RESULT_SLIDING", "600"))  # 10 min
    embedding_cache_ttl: int = int(os.getenv("EMBEDDING_CACHE_TTL", "86400"))  # 24 h
    search_result_ttl: int = int(os.getenv("SEARCH_RESULT_TTL", "900"))  # 15 min
    search_result_sliding: int = int(os.getenv("SEARCH_RESULT_SLIDING", "300"))  # 5 min
    # 0 means unbounded
    exact_cache_size_limit: int = int(os.getenv("EXACT_CACHE_SIZE_LIMIT", "0"))

    # Semantic cache
    semantic_cache_enabled: bool = os.getenv("SEMANTIC_CACHE_ENABLED", "true").lower() == "true"
    semantic_similarity_threshold: float = float(
        os.getenv("SEMANTIC_SIMILARITY_THRESHOLD", "0.95")
    )
    semantic_max_entries: int = int(os.getenv("SEMANTIC_MAX_ENTRIES", "500"))

    # Embedding
    embedding_provider: str = os.getenv("EMBEDDING_PROVIDER", "ollama")  # ollama, local or none
    embedding_model: str = os.getenv("EMBEDDING_MODEL", "embeddinggemma")
    embedding_timeout: float = float(os.getenv("EMBEDDING_TIMEOUT", "10"))

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    # Catalog / search
    catalog_path: str | None = os.getenv("CATALOG_PATH") or None
    search_top_k: int = int(os.getenv("SEARCH_TOP_K", "6"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def semantic_cache_ttl(self) -> int:
        """Semantic entries share the query-result TTL."""
        return self.query_result_ttl

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 <= self.semantic_similarity_threshold <= 1:
            raise ValueError("SEMANTIC_SIMILARITY_THRESHOLD must be between 0 and 1")

        if self.semantic_max_entries <= 0:
            raise ValueError("SEMANTIC_MAX_ENTRIES must be positive")

        for name in (
            "query_result_ttl",
            "query_result_sliding",
            "embedding_cache_ttl",
            "search_result_ttl",
            "search_result_sliding",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be positive, got {getattr(self, name)}")

        if self.exact_cache_size_limit < 0:
            raise ValueError("EXACT_CACHE_SIZE_LIMIT must be >= 0")

        if self.embedding_timeout <= 0:
            raise ValueError("EMBEDDING_TIMEOUT must be positive")

        if self.embedding_provider not in ("ollama", "local", "none"):
            raise ValueError(
                f"EMBEDDING_PROVIDER must be one of ['ollama', 'local', 'none'], "
                f"got {self.embedding_provider}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
