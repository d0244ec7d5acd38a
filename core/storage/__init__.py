"""Key-value store package."""

from core.config import Settings
from core.log import get_logger
from core.types import KVBackend

from .base import KVKey, KVListResult, KVStore
from .engine import create_database_engine
from .exceptions import KVStoreError
from .memory import InMemoryKVStore
from .sqlite import SQLiteKVStore

logger = get_logger(__name__)


def create_kv_store(settings: Settings) -> KVStore | None:
    """Build the configured store, or None when no store is bound."""
    if settings.kv_backend == KVBackend.NONE:
        logger.warning("No key-value store bound; store-backed endpoints will fail")
        return None
    if settings.kv_backend == KVBackend.MEMORY:
        logger.info("Using in-memory key-value store")
        return InMemoryKVStore()
    engine = create_database_engine(settings.environment, db_path=settings.kv_db_path)
    return SQLiteKVStore(engine)


__all__ = [
    "InMemoryKVStore",
    "KVKey",
    "KVListResult",
    "KVStore",
    "KVStoreError",
    "SQLiteKVStore",
    "create_database_engine",
    "create_kv_store",
]
