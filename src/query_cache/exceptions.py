"""Exception types raised inside the query cache package."""


class QueryCacheError(Exception):
    """Base class for query cache errors."""


class EmbeddingUnavailableError(QueryCacheError):
    """The embedding provider failed or could not be reached."""


class CatalogNotInitializedError(QueryCacheError):
    """Catalog vectors were requested before the catalog was embedded."""
