"""Database engine factory for the SQLite-backed store."""

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from core.log import get_logger
from core.types import Environment

from .rows import KVEntry

logger = get_logger(__name__)


def setup_database_url(environment: Environment, db_path: Path | None = None) -> str:
    """Construct the database URL for an environment.

    Args:
        environment: Environment type
        db_path: Optional custom database path. If provided, overrides default path.

    Returns:
        Database connection URL
    """
    if db_path is None:
        if environment == Environment.TESTING:
            return "sqlite:///:memory:"
        if environment == Environment.PRODUCTION:
            db_path = Path("db", "arni.db")
        elif environment == Environment.DEVELOPMENT:
            db_path = Path("db", "arni.dev.db")
        else:
            raise ValueError(f"Unknown environment: {environment}")

    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


def create_database_engine(
    environment: Environment,
    echo: bool = False,
    db_path: Path | None = None,
) -> Engine:
    """Create the SQLite engine and make sure the kv table exists."""
    database_url = setup_database_url(environment, db_path)
    logger.info(f"Creating database engine for: {database_url}")

    engine = create_engine(
        database_url,
        echo=echo,
        connect_args={
            "check_same_thread": False,
            "timeout": 60.0,
        },
        pool_pre_ping=True,
    )
    SQLModel.metadata.create_all(engine)
    logger.info(f"> Created table for {KVEntry.__tablename__}")
    return engine
