"""Periodic execution of background jobs inside the application lifespan."""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum

from core.log import get_logger
from core.models.domain.schedule import ScheduleStats

logger = get_logger(__name__)


class TaskStatus(Enum):
    """Status of the periodic loop."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class PeriodicTask(ABC):
    """A job run once per interval."""

    name: str = "periodic-task"

    @abstractmethod
    async def execute(self) -> None:
        """Run one iteration of the job."""
        pass

    async def on_error(self, error: Exception) -> None:
        """Called when an iteration raises.

        Args:
            error: The exception that occurred
        """
        logger.error(f"Error in {self.name}: {error}")


class PeriodicTaskManager:
    """Runs a ``PeriodicTask`` in a background asyncio task.

    A failing iteration is reported and the next one still runs on schedule;
    the loop only ends when the manager is stopped.
    """

    def __init__(self, task: PeriodicTask, interval_seconds: float = 60):
        """Initialize the manager.

        Args:
            task: The periodic task to execute
            interval_seconds: Interval between executions in seconds
        """
        self.task = task
        self.interval_seconds = interval_seconds

        self.status = TaskStatus.IDLE
        self.stats = ScheduleStats()
        self._background_task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._background_task is not None and not self._background_task.done()

    async def start(self) -> None:
        """Launch the periodic loop; the first iteration runs immediately."""
        if self.running:
            logger.warning(f"{self.task.name} already running")
            return

        self._stop_event.clear()
        self.stats.start_time = datetime.now()
        self.status = TaskStatus.RUNNING
        self._background_task = asyncio.create_task(self._periodic_loop())
        logger.info(f"{self.task.name} started with {self.interval_seconds}s interval")

    async def stop(self) -> None:
        """Stop the loop and wait for it to finish."""
        self._stop_event.set()

        if self._background_task and not self._background_task.done():
            self._background_task.cancel()
            try:
                await self._background_task
            except asyncio.CancelledError:
                pass

        self._background_task = None
        self.status = TaskStatus.STOPPED
        logger.info(
            f"{self.task.name} stopped after {self.stats.executions} executions "
            f"and {self.stats.errors} errors"
        )

    async def _periodic_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                await self.task.execute()
                self._record_success()
            except asyncio.CancelledError:
                break
            except Exception as e:
                self._record_error()
                await self._handle_error(e)
                logger.warning(
                    f"{self.task.name} failed {self.stats.consecutive_errors} "
                    f"time(s) in a row, retrying in {self.interval_seconds}s"
                )

            # Wait for the next iteration or the stop signal
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(), timeout=self.interval_seconds
                )
            except asyncio.TimeoutError:
                pass

    def _record_success(self) -> None:
        self.stats.executions += 1
        self.stats.consecutive_errors = 0
        self.stats.last_execution_time = datetime.now()

    def _record_error(self) -> None:
        self.stats.errors += 1
        self.stats.consecutive_errors += 1
        self.stats.last_error_time = datetime.now()

    async def _handle_error(self, error: Exception) -> None:
        try:
            await self.task.on_error(error)
        except Exception as e:
            logger.error(f"Error in task error handler: {e}")
