"""Application service initializer for managing startup and shutdown."""

from fastapi import FastAPI

from core.config import Settings
from core.log import get_logger
from core.periodic_task import PeriodicTaskManager
from core.services import (
    ActivityLog,
    ProxyService,
    ScheduledHookTask,
    TrafficTracker,
    UsageAggregator,
    WindowAccountingService,
    WindowLimits,
)
from core.storage import KVStore, create_kv_store

logger = get_logger(__name__)


class AppServiceInitializer:
    """Manages initialization and lifecycle of application services."""

    def __init__(self, settings: Settings, store: KVStore | None = None):
        """Initialize with application settings.

        Args:
            settings: Application settings
            store: Store to use instead of the one configured in ``settings``;
                a store passed in is left open on shutdown
        """
        self.settings = settings
        self.store = store
        self._owns_store = store is None
        self.activity: ActivityLog | None = None
        self.window_service: WindowAccountingService | None = None
        self.aggregator: UsageAggregator | None = None
        self.traffic_tracker: TrafficTracker | None = None
        self.proxy_service: ProxyService | None = None
        self.cron_manager: PeriodicTaskManager | None = None

    async def initialize_all_services(self, app: FastAPI) -> None:
        """Initialize all services and configure app.state."""
        logger.info("Initializing all application services...")

        self.initialize_store()
        self.initialize_usage_services()
        await self.initialize_proxy()
        self.initialize_cron()
        self._setup_app_state(app)

        logger.info("All application services initialized successfully")

    def initialize_store(self) -> None:
        if self._owns_store:
            self.store = create_kv_store(self.settings)
        self.activity = ActivityLog(self.store, self.settings.log_ttl)
        self.traffic_tracker = TrafficTracker(self.store, self.settings.traffic_ttl)

    def initialize_usage_services(self) -> None:
        """Initialize the window accounting and aggregation services."""
        self.window_service = WindowAccountingService(
            self.store, WindowLimits.from_settings(self.settings)
        )
        self.aggregator = UsageAggregator.from_settings(
            self.store, self.window_service, self.settings
        )

    async def initialize_proxy(self) -> None:
        if not self.activity:
            raise RuntimeError("Store must be initialized before the proxy")
        self.proxy_service = ProxyService(self.activity, self.settings.proxy_timeout)
        await self.proxy_service.start()

    def initialize_cron(self) -> None:
        if not self.activity:
            raise RuntimeError("Store must be initialized before the scheduled hook")
        self.cron_manager = PeriodicTaskManager(
            ScheduledHookTask(self.store, self.activity),
            interval_seconds=self.settings.cron_interval_seconds,
        )

    async def start_all_services(self) -> None:
        """Start all background services."""
        if self.cron_manager and self.settings.cron_enabled:
            await self.cron_manager.start()
        else:
            logger.warning("Scheduled hook is disabled")

    async def stop_all_services(self) -> None:
        """Stop background services and release resources."""
        logger.info("Stopping all background services...")

        if self.cron_manager:
            await self.cron_manager.stop()

        if self.proxy_service:
            await self.proxy_service.close()

        if self.store is not None and self._owns_store:
            await self.store.close()

        logger.info("All background services stopped successfully")

    def _setup_app_state(self, app: FastAPI) -> None:
        """Configure app.state with initialized services."""
        app.state.store = self.store
        app.state.activity = self.activity
        app.state.window_service = self.window_service
        app.state.aggregator = self.aggregator
        app.state.traffic_tracker = self.traffic_tracker
        app.state.proxy_service = self.proxy_service
        app.state.cron_manager = self.cron_manager
