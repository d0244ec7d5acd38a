"""Core functionality for the arni system."""

from .config import Settings, load_settings
from .log import get_logger, setup_logging, setup_test_logging
from .types import Environment, KVBackend

__all__ = [
    "Environment",
    "KVBackend",
    "Settings",
    "load_settings",
    "get_logger",
    "setup_logging",
    "setup_test_logging",
]
