"""Task management endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from api.dependencies import get_task_service
from api.errors import ApiError
from core.models.api.requests import TaskCreateRequest
from core.models.api.responses import (
    RecordDeletedResponse,
    TaskCreatedResponse,
    TaskListResponse,
    TaskUpdatedResponse,
)
from core.services import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskListResponse:
    return TaskListResponse(tasks=await service.list())


@router.post("", response_model=TaskCreatedResponse)
async def create_task(
    request: TaskCreateRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskCreatedResponse:
    task_id, task = await service.create_task(request)
    return TaskCreatedResponse(id=task_id, task=task)


@router.put("/{task_id}", response_model=TaskUpdatedResponse)
async def update_task(
    task_id: str,
    updates: Annotated[dict[str, Any], Body()],
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskUpdatedResponse:
    """Shallow-merge ``updates`` into the task."""
    result = await service.update_task(task_id, updates)
    if result is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Task not found")
    key, task = result
    return TaskUpdatedResponse(id=key, task=task)


@router.delete("/{task_id}", response_model=RecordDeletedResponse)
async def delete_task(
    task_id: str, service: Annotated[TaskService, Depends(get_task_service)]
) -> RecordDeletedResponse:
    return RecordDeletedResponse(id=await service.delete_task(task_id))
