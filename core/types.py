"""Common type definitions for the arni system."""

from enum import Enum
from typing import Any, TypeAlias

JSONObject: TypeAlias = dict[str, Any]


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class KVBackend(str, Enum):
    """Key-value store backends."""

    SQLITE = "sqlite"
    MEMORY = "memory"
    NONE = "none"
