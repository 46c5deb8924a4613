"""Cached query result domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachedQueryResult:
    """Domain entity for a cached query-response pair.

    Returned by both cache tiers. Instances are immutable; storing the same
    query again replaces the entry wholesale.

    Attributes:
        query: The original query text
        normalized_query: The query after normalization
        response: The cached response text
        sources: Source identifiers, in the order they were given
        cached_at: When the entry was created (Unix timestamp)
    """

    query: str
    normalized_query: str
    response: str
    sources: tuple[str, ...] = ()
    cached_at: float = 0.0
