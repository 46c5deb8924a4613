"""Utility modules for the query cache."""

from .text import make_cache_key, normalize_query, query_hash, truncate
from .vector_math import as_vector, cosine_similarity, top_k_similar

__all__ = [
    "as_vector",
    "cosine_similarity",
    "make_cache_key",
    "normalize_query",
    "query_hash",
    "top_k_similar",
    "truncate",
]
