"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (memory store, local or Ollama embeddings)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from query_cache.protocols import EmbeddingProvider, KeyValueStore

    store: KeyValueStore = MemoryKeyValueStore()
    provider: EmbeddingProvider = OllamaEmbeddingProvider.create()
    ```
"""

from .embedding_provider import EmbeddingProvider
from .item_catalog import ItemCatalog
from .key_value_store import CachePriority, KeyValueStore

__all__ = [
    "CachePriority",
    "EmbeddingProvider",
    "ItemCatalog",
    "KeyValueStore",
]
