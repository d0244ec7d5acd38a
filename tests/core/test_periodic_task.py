"""Tests for the periodic task manager."""

import asyncio

import pytest

from core.periodic_task import PeriodicTask, PeriodicTaskManager, TaskStatus


class CountingTask(PeriodicTask):
    name = "counting"

    def __init__(self, failures: int = 0):
        self.calls = 0
        self.failures = failures
        self.errors: list[Exception] = []

    async def execute(self) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("boom")

    async def on_error(self, error: Exception) -> None:
        self.errors.append(error)


@pytest.mark.asyncio
async def test_first_iteration_runs_immediately():
    task = CountingTask()
    manager = PeriodicTaskManager(task, interval_seconds=3600)
    assert manager.status == TaskStatus.IDLE

    await manager.start()
    await asyncio.sleep(0.05)

    assert manager.running
    assert manager.status == TaskStatus.RUNNING
    assert task.calls == 1
    assert manager.stats.executions == 1

    await manager.stop()
    assert not manager.running
    assert manager.status == TaskStatus.STOPPED


@pytest.mark.asyncio
async def test_runs_every_interval():
    task = CountingTask()
    manager = PeriodicTaskManager(task, interval_seconds=0.01)

    await manager.start()
    await asyncio.sleep(0.2)
    await manager.stop()

    assert task.calls >= 3


@pytest.mark.asyncio
async def test_start_twice_keeps_one_loop():
    task = CountingTask()
    manager = PeriodicTaskManager(task, interval_seconds=3600)

    await manager.start()
    await manager.start()
    await asyncio.sleep(0.05)
    await manager.stop()

    assert task.calls == 1


@pytest.mark.asyncio
async def test_keeps_running_after_repeated_errors():
    """Failures are reported and the schedule continues."""
    task = CountingTask(failures=5)
    manager = PeriodicTaskManager(task, interval_seconds=0.01)

    await manager.start()
    await asyncio.sleep(0.3)

    assert manager.running
    assert manager.status == TaskStatus.RUNNING
    assert len(task.errors) == 5
    assert manager.stats.errors == 5
    assert manager.stats.executions >= 1
    assert manager.stats.consecutive_errors == 0

    await manager.stop()


@pytest.mark.asyncio
async def test_failing_error_handler_does_not_stop_loop():
    class BrokenHandlerTask(CountingTask):
        async def on_error(self, error: Exception) -> None:
            raise ValueError("handler failed")

    task = BrokenHandlerTask(failures=2)
    manager = PeriodicTaskManager(task, interval_seconds=0.01)

    await manager.start()
    await asyncio.sleep(0.2)
    await manager.stop()

    assert task.calls > 2
    assert manager.stats.errors == 2
