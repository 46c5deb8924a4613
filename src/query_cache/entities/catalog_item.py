"""Catalog domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogItem:
    """A searchable catalog item (a recipe).

    Only ``description`` is embedded for similarity search.
    """

    key: int
    name: str
    description: str
    category: str = ""
    ingredients: str = ""
    cooking_time: str = ""
    difficulty: str = ""

    @property
    def source_id(self) -> str:
        """Source identifier used in cached answers."""
        return f"recipe:{self.key}"


@dataclass(frozen=True)
class ScoredItem:
    """A catalog item with its similarity to a query."""

    item: CatalogItem
    score: float
