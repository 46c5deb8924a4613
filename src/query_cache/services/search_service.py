"""Catalog similarity search.

Ranks catalog items by cosine similarity between the query embedding and
each item's description embedding. Query embeddings and ranked result lists
are cached through QueryCacheService.
"""

import asyncio
import logging

from query_cache.config import settings
from query_cache.entities import ScoredItem
from query_cache.exceptions import EmbeddingUnavailableError
from query_cache.protocols import EmbeddingProvider, ItemCatalog
from query_cache.utils import top_k_similar, truncate

from .cache_service import QueryCacheService

logger = logging.getLogger(__name__)


class SearchService:
    """Top-K similarity search over the item catalog."""

    def __init__(
        self,
        catalog: ItemCatalog,
        cache: QueryCacheService,
        embedding_provider: EmbeddingProvider | None,
        default_top_k: int | None = None,
        embedding_timeout: float | None = None,
    ) -> None:
        self._catalog = catalog
        self._cache = cache
        self._embeddings = embedding_provider
        self._default_top_k = default_top_k if default_top_k is not None else settings.search_top_k
        self._embedding_timeout = (
            embedding_timeout if embedding_timeout is not None else settings.embedding_timeout
        )

    @staticmethod
    def search_type(top_k: int) -> str:
        """Search-cache discriminator; results for different K never mix."""
        return f"catalog-top{top_k}"

    async def embed_query(self, query: str) -> list[float]:
        """Embed a query, reusing the embedding cache.

        Raises:
            EmbeddingUnavailableError: If the provider fails or times out
        """
        cached = self._cache.get_cached_embedding(query)
        if cached is not None:
            return cached

        if self._embeddings is None:
            raise EmbeddingUnavailableError("No embedding provider configured")

        try:
            vector = await asyncio.wait_for(
                self._embeddings.encode(query), timeout=self._embedding_timeout
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingUnavailableError(
                f"Embedding timed out after {self._embedding_timeout}s"
            ) from e

        self._cache.cache_embedding(query, vector)
        return list(vector)

    async def search(self, query: str, top_k: int | None = None) -> list[ScoredItem]:
        """Search the catalog for items similar to ``query``.

        Args:
            query: Natural-language query
            top_k: Number of results. Defaults to settings.search_top_k.

        Returns:
            Scored items, most similar first. A blank query returns the first
            ``top_k`` items with score 0.

        Raises:
            EmbeddingUnavailableError: If the query cannot be embedded
            CatalogNotInitializedError: If the catalog was never embedded
        """
        top_k = top_k or self._default_top_k

        if not query or not query.strip():
            return [ScoredItem(item=item, score=0.0) for item in self._catalog.items()[:top_k]]

        search_type = self.search_type(top_k)
        cached = self._cache.get_cached_search_results(search_type, query)
        if cached is not None:
            return cached

        query_vector = await self.embed_query(query)
        items = self._catalog.items()
        ranked = top_k_similar(query_vector, self._catalog.vectors(), top_k=top_k, min_similarity=-1.0)
        results = [ScoredItem(item=items[index], score=score) for index, score in ranked]

        self._cache.cache_search_results(search_type, query, results)
        logger.info("Search for '%s' returned %d items", truncate(query, 40), len(results))
        return results
