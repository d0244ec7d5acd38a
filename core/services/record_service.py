"""Prefix-keyed JSON records in the key-value store."""

import json
from datetime import datetime
from typing import Any

from core.constants import CONFIG_KEY, NOTE_PREFIX, TASK_PREFIX
from core.log import get_logger
from core.models.api.requests import NoteCreateRequest, TaskCreateRequest
from core.models.domain.records import Note, Task
from core.storage import KVStore
from core.types import JSONObject
from core.utils import get_current_timestamp, loads_or_none, to_epoch_ms, utc_now

from .activity_log import ActivityLog
from .listing import load_values

logger = get_logger(__name__)


class RecordService:
    """CRUD over JSON objects stored as ``<prefix><epoch-ms>``."""

    def __init__(
        self,
        store: KVStore,
        prefix: str,
        activity: ActivityLog,
        list_limit: int = 100,
    ) -> None:
        self.store = store
        self.prefix = prefix
        self.activity = activity
        self.list_limit = list_limit

    def record_key(self, record_id: str) -> str:
        """Full store key for an id given with or without its prefix."""
        if record_id.startswith(self.prefix):
            return record_id
        return f"{self.prefix}{record_id}"

    async def list(self) -> list[JSONObject]:
        """Records in key order, each merged with its ``id``."""
        listing = await self.store.list(prefix=self.prefix, limit=self.list_limit)
        records = await load_values(self.store, [key.name for key in listing.keys])
        return [
            {"id": name, **value}
            for name, value in records
            if isinstance(value, dict)
        ]

    async def get(self, record_id: str) -> JSONObject | None:
        value = loads_or_none(await self.store.get(self.record_key(record_id)))
        return value if isinstance(value, dict) else None

    async def create(
        self, record: JSONObject, now: datetime | None = None
    ) -> tuple[str, JSONObject]:
        """Store ``record`` under a new time-based key."""
        record_id = f"{self.prefix}{to_epoch_ms(now or utc_now())}"
        await self.store.put(record_id, json.dumps(record))
        return record_id, record

    async def update(
        self, record_id: str, updates: JSONObject, now: datetime | None = None
    ) -> tuple[str, JSONObject] | None:
        """Shallow-merge ``updates`` into an existing record."""
        key = self.record_key(record_id)
        existing = await self.get(key)
        if existing is None:
            return None
        updated = {**existing, **updates, "updated": get_current_timestamp(now)}
        await self.store.put(key, json.dumps(updated))
        return key, updated

    async def delete(self, record_id: str) -> str:
        key = self.record_key(record_id)
        await self.store.delete(key)
        return key


class TaskService(RecordService):
    """Task records with activity logging."""

    def __init__(self, store: KVStore, activity: ActivityLog, list_limit: int = 100):
        super().__init__(store, TASK_PREFIX, activity, list_limit)

    async def create_task(
        self, request: TaskCreateRequest, now: datetime | None = None
    ) -> tuple[str, JSONObject]:
        timestamp = get_current_timestamp(now)
        task = Task(
            title=request.title,
            description=request.description or "",
            priority=request.priority or "normal",
            created=timestamp,
            updated=timestamp,
        )
        task_id, record = await self.create(task.model_dump(), now)
        await self.activity.log("task", f"Created: {request.title}")
        return task_id, record

    async def update_task(
        self, task_id: str, updates: JSONObject, now: datetime | None = None
    ) -> tuple[str, JSONObject] | None:
        result = await self.update(task_id, updates, now)
        if result is not None:
            _, task = result
            status = updates.get("status") or "modified"
            title = task.get("title")
            await self.activity.log("task", f"Updated: {title} -> {status}")
        return result

    async def delete_task(self, task_id: str) -> str:
        key = await self.delete(task_id)
        await self.activity.log("task", f"Deleted: {key}")
        return key


class NoteService(RecordService):
    """Note records."""

    def __init__(self, store: KVStore, activity: ActivityLog, list_limit: int = 100):
        super().__init__(store, NOTE_PREFIX, activity, list_limit)

    async def create_note(
        self, request: NoteCreateRequest, now: datetime | None = None
    ) -> tuple[str, JSONObject]:
        timestamp = get_current_timestamp(now)
        note = Note(
            title=request.title or "Untitled",
            content=request.content,
            tags=request.tags or [],
            created=timestamp,
            updated=timestamp,
        )
        note_id, record = await self.create(note.model_dump(), now)
        await self.activity.log("note", f"Created: {note.title}")
        return note_id, record


class ConfigService:
    """The ``config:main`` singleton, stored exactly as submitted."""

    def __init__(self, store: KVStore, activity: ActivityLog) -> None:
        self.store = store
        self.activity = activity

    async def get(self) -> Any:
        config = loads_or_none(await self.store.get(CONFIG_KEY))
        return config if config is not None else {}

    async def put(self, body: str) -> None:
        await self.store.put(CONFIG_KEY, body)
        await self.activity.log("config", "Configuration updated")
