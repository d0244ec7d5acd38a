"""SQLite-backed key-value store built on SQLModel."""

import time

from sqlalchemy import func, or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from core.constants import MAX_LIST_LIMIT
from core.log import get_logger

from .base import KVKey, KVListResult, KVStore
from .exceptions import KVStoreError
from .rows import KVEntry

logger = get_logger(__name__)


class SQLiteKVStore(KVStore):
    """Key-value store persisted in a single SQLite table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    async def get(self, key: str) -> str | None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, key)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to read {key}: {exc}")
            raise KVStoreError(f"Failed to read {key}") from exc

        if entry is None:
            return None
        if entry.expiration is not None and entry.expiration <= time.time():
            return None
        return entry.value

    async def put(
        self, key: str, value: str, expiration_ttl: int | None = None
    ) -> None:
        expiration = int(time.time()) + expiration_ttl if expiration_ttl else None
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, key)
                if entry is None:
                    entry = KVEntry(key=key, value=value, expiration=expiration)
                else:
                    entry.value = value
                    entry.expiration = expiration
                session.add(entry)
                session.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Failed to write {key}: {exc}")
            raise KVStoreError(f"Failed to write {key}") from exc

    async def delete(self, key: str) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, key)
                if entry is not None:
                    session.delete(entry)
                    session.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Failed to delete {key}: {exc}")
            raise KVStoreError(f"Failed to delete {key}") from exc

    async def list(
        self,
        prefix: str = "",
        limit: int = MAX_LIST_LIMIT,
        cursor: str | None = None,
    ) -> KVListResult:
        now = int(time.time())
        page_size = max(0, limit)
        conditions = [
            or_(col(KVEntry.expiration).is_(None), col(KVEntry.expiration) > now)
        ]
        if prefix:
            # substr keeps the match case-sensitive, unlike LIKE in SQLite
            conditions.append(func.substr(KVEntry.key, 1, len(prefix)) == prefix)
        if cursor is not None:
            conditions.append(col(KVEntry.key) > cursor)

        # One extra row tells whether another page follows
        statement = (
            select(KVEntry.key, KVEntry.expiration)
            .where(*conditions)
            .order_by(col(KVEntry.key))
            .limit(page_size + 1)
        )

        try:
            with Session(self.engine) as session:
                rows = session.exec(statement).all()
        except SQLAlchemyError as exc:
            logger.error(f"Failed to list prefix {prefix!r}: {exc}")
            raise KVStoreError(f"Failed to list prefix {prefix!r}") from exc

        page = rows[:page_size]
        complete = len(rows) <= page_size
        return KVListResult(
            keys=[KVKey(name=name, expiration=expiration) for name, expiration in page],
            list_complete=complete,
            cursor=None if complete or not page else page[-1][0],
        )

    async def purge_expired(self) -> int:
        now = int(time.time())
        statement = select(KVEntry).where(
            col(KVEntry.expiration).is_not(None), col(KVEntry.expiration) <= now
        )
        try:
            with Session(self.engine) as session:
                expired = session.exec(statement).all()
                for entry in expired:
                    session.delete(entry)
                session.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Failed to purge expired keys: {exc}")
            raise KVStoreError("Failed to purge expired keys") from exc

        if expired:
            logger.info(f"Purged {len(expired)} expired keys")
        return len(expired)

    async def close(self) -> None:
        self.engine.dispose()
