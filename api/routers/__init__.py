"""API routers package."""

from .common import router as common_router
from .config import router as config_router
from .logs import router as logs_router
from .memory import router as memory_router
from .notes import router as notes_router
from .proxy import router as proxy_router
from .tasks import router as tasks_router
from .usage import router as usage_router
from .webhooks import router as webhooks_router

__all__ = [
    "common_router",
    "config_router",
    "logs_router",
    "memory_router",
    "notes_router",
    "proxy_router",
    "tasks_router",
    "usage_router",
    "webhooks_router",
]
