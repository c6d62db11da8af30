from .client import SqlStoreClient, StoreResult
from .query import Query

__all__ = ["SqlStoreClient", "StoreResult", "Query"]
