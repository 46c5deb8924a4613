"""Repository layer for data access.

This layer abstracts external dependencies (key/value storage, embedding
APIs, the item catalog) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

LocalEmbeddingProvider is not re-exported here because it needs the optional
``local`` extra; import it from ``query_cache.repositories.local_embedding_provider``.
"""

from query_cache.protocols import EmbeddingProvider, ItemCatalog, KeyValueStore

from .memory_catalog import InMemoryItemCatalog
from .memory_store import MemoryKeyValueStore
from .ollama_embedding_provider import OllamaEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "InMemoryItemCatalog",
    "ItemCatalog",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "OllamaEmbeddingProvider",
]
