"""SQLModel rows for the SQLite-backed store."""

from sqlmodel import Field, Index, SQLModel


class KVEntry(SQLModel, table=True):
    """A single key-value pair."""

    __tablename__ = "kv_entry"

    key: str = Field(primary_key=True, description="Store key")
    value: str = Field(description="Raw stored value")
    expiration: int | None = Field(
        default=None, description="Expiry time in epoch seconds"
    )

    __table_args__ = (Index("idx_kv_entry_expiration", "expiration"),)
