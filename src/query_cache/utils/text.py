"""Query normalization and cache key hashing."""

import hashlib
import re

# Space-delimited so only whole words are removed
FILLER_PHRASES = (" por favor ", " please ", " gracias ", " thanks ", " porfavor ")

_MULTIPLE_SPACES = re.compile(r" {2,}")


def _keep_char(char: str) -> bool:
    return char.isalnum() or char in (" ", "?", "¿")


def normalize_query(query: str) -> str:
    """Normalize a query so trivially different phrasings share a cache slot.

    Lowercases, trims, drops punctuation other than inner question marks,
    collapses repeated spaces and strips common English/Spanish filler
    phrases.

    Args:
        query: Raw user query

    Returns:
        The normalized query, or "" for blank input

    Example:
        ```python
        normalize_query("  What   is this  ")  # "what is this"
        normalize_query("What is this?")        # "what is this"
        normalize_query("is it ok? please")     # "is it ok? please"
        ```
    """
    if not query or not query.strip():
        return ""

    normalized = query.lower().strip()
    normalized = "".join(c for c in normalized if _keep_char(c))
    normalized = _MULTIPLE_SPACES.sub(" ", normalized)

    # Adjacent fillers share a space, so a single pass can leave one behind
    previous = None
    while previous != normalized:
        previous = normalized
        for filler in FILLER_PHRASES:
            normalized = normalized.replace(filler, " ")

    # Leading/trailing question marks carry no meaning for matching
    return normalized.strip(" ?¿")


def query_hash(text: str) -> str:
    """Return the first 16 hex characters of the SHA-256 of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16].upper()


def make_cache_key(namespace: str, text: str) -> str:
    """Build a namespaced cache key, e.g. ``query_result:1A2B3C4D5E6F7A8B``."""
    return f"{namespace}:{query_hash(text)}"


def truncate(text: str, limit: int) -> str:
    """Shorten text for log lines."""
    return text if len(text) <= limit else text[:limit] + "..."
