"""Cached question answering.

Callers ask a question; the service tries the exact tier, then the semantic
tier, and only on a double miss runs the catalog search. Fresh answers are
written back to both tiers. The cache is a pure optimization: if any cache
call fails the question is answered through the uncached path.
"""

import logging

from query_cache.entities import Answer, ScoredItem
from query_cache.utils import truncate

from .cache_service import QueryCacheService
from .search_service import SearchService

logger = logging.getLogger(__name__)


class AnswerService:
    """Answer questions from the catalog, with two-tier caching."""

    def __init__(self, cache: QueryCacheService, search: SearchService) -> None:
        self._cache = cache
        self._search = search

    async def answer(self, question: str, top_k: int | None = None) -> Answer:
        """Answer a question.

        Args:
            question: The user's question
            top_k: Number of catalog items to consider on a cache miss

        Returns:
            The answer, flagged ``from_cache`` when served by either tier

        Raises:
            EmbeddingUnavailableError: If the uncached path cannot embed the question
        """
        cached = self._lookup(question)
        if cached is not None:
            logger.info("Cache HIT (string match) for '%s'", truncate(question, 40))
            return cached

        semantic = await self._cache.get_semantically_cached_response(question)
        if semantic is not None:
            return Answer(
                question=question,
                answer=semantic.response,
                sources=semantic.sources,
                from_cache=True,
            )

        results = await self._search.search(question, top_k)
        response = self.compose(question, results)
        sources = [r.item.source_id for r in results]

        self._store(question, response, sources)
        await self._cache.add_to_semantic_cache(question, response, sources)

        return Answer(question=question, answer=response, sources=tuple(sources))

    def _lookup(self, question: str) -> Answer | None:
        try:
            cached = self._cache.get_cached_response(question)
        except Exception:
            logger.warning("Exact cache lookup failed; answering uncached", exc_info=True)
            return None
        if cached is None:
            return None
        return Answer(
            question=question, answer=cached.response, sources=cached.sources, from_cache=True
        )

    def _store(self, question: str, response: str, sources: list[str]) -> None:
        try:
            self._cache.cache_response(question, response, sources)
        except Exception:
            logger.warning("Failed to cache response for '%s'", truncate(question, 40), exc_info=True)

    @staticmethod
    def compose(question: str, results: list[ScoredItem]) -> str:
        """Build the answer text from ranked catalog items."""
        if not results:
            return "No matching recipes found."

        lines = [f"Top matches for '{question}':"]
        for rank, result in enumerate(results, start=1):
            item = result.item
            details = ", ".join(p for p in (item.category, item.cooking_time, item.difficulty) if p)
            lines.append(f"{rank}. {item.name}" + (f" ({details})" if details else ""))
        return "\n".join(lines)
