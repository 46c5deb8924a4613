"""HTTP handlers for catalog search and cached answers."""

import time

from fastapi import HTTPException, status

from query_cache.dto import QueryRequest, QueryResponse, SearchRequest, SearchResponse, SearchResultItem
from query_cache.exceptions import CatalogNotInitializedError, EmbeddingUnavailableError
from query_cache.services import AnswerService, SearchService


class SearchHandler:
    """HTTP handlers for search and question answering.

    Embedding outages map to 503, a catalog that was never embedded to 409.
    """

    def __init__(self, search_service: SearchService, answer_service: AnswerService) -> None:
        self._search = search_service
        self._answers = answer_service

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Handle POST /search requests."""
        start_time = time.time()
        try:
            results = await self._search.search(request.query, request.top_k)
        except EmbeddingUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Embedding service unavailable: {e}",
            ) from e
        except CatalogNotInitializedError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

        return SearchResponse(
            query=request.query,
            results=[
                SearchResultItem(
                    key=r.item.key,
                    name=r.item.name,
                    category=r.item.category,
                    description=r.item.description,
                    score=r.score,
                )
                for r in results
            ],
            search_time_ms=(time.time() - start_time) * 1000,
        )

    async def answer(self, request: QueryRequest) -> QueryResponse:
        """Handle POST /query requests."""
        try:
            answer = await self._answers.answer(request.question, request.top_k)
        except EmbeddingUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Embedding service unavailable: {e}",
            ) from e
        except CatalogNotInitializedError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

        return QueryResponse(
            question=answer.question,
            answer=answer.answer,
            sources=list(answer.sources),
            from_cache=answer.from_cache,
        )
