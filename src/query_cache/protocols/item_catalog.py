"""Item catalog protocol."""

from typing import Protocol, runtime_checkable

from query_cache.entities import CatalogItem


@runtime_checkable
class ItemCatalog(Protocol):
    """Protocol for the searchable item catalog.

    ``items()`` and ``vectors()`` are parallel lists: ``vectors()[i]`` is the
    embedding of ``items()[i]``.
    """

    def items(self) -> list[CatalogItem]:
        """Return all catalog items in catalog order."""
        ...

    def vectors(self) -> list[list[float]]:
        """Return the item embeddings in catalog order.

        Raises:
            CatalogNotInitializedError: If the items were never embedded
        """
        ...
