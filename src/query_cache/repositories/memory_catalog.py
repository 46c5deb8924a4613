"""In-memory item catalog.

Items are fixed for the lifetime of the process. Each description is
embedded once by ``initialize`` and kept alongside the item.
"""

import json
import logging
from pathlib import Path

from query_cache.entities import CatalogItem
from query_cache.exceptions import CatalogNotInitializedError
from query_cache.protocols import EmbeddingProvider

logger = logging.getLogger(__name__)


class InMemoryItemCatalog:
    """In-memory implementation of the ItemCatalog protocol.

    Example:
        ```python
        catalog = InMemoryItemCatalog.from_json("data/recipes.json")
        await catalog.initialize(provider)
        ```
    """

    def __init__(self, items: list[CatalogItem] | None = None) -> None:
        self._items = list(items or [])
        self._vectors: list[list[float]] | None = None

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryItemCatalog":
        """Load catalog items from a JSON array of objects.

        Args:
            path: Path to the JSON file. Object keys match CatalogItem fields.

        Returns:
            An uninitialized catalog
        """
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        items = [CatalogItem(**record) for record in raw]
        logger.info("Loaded %d catalog items from %s", len(items), path)
        return cls(items)

    @property
    def is_initialized(self) -> bool:
        return self._vectors is not None

    async def initialize(self, embedding_provider: EmbeddingProvider) -> None:
        """Embed every item description. Runs once; later calls are no-ops."""
        if self._vectors is not None:
            return

        vectors = []
        for item in self._items:
            vectors.append(list(await embedding_provider.encode(item.description)))
        self._vectors = vectors
        logger.info("Embedded %d catalog items with %s", len(vectors), embedding_provider.model_name)

    def items(self) -> list[CatalogItem]:
        return list(self._items)

    def vectors(self) -> list[list[float]]:
        if self._vectors is None:
            raise CatalogNotInitializedError("Catalog has not been embedded; call initialize() first")
        return list(self._vectors)

    def __len__(self) -> int:
        return len(self._items)
