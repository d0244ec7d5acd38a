"""Raw key-value access endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import get_memory_service
from api.errors import ApiError
from core.models.api.responses import (
    MemoryDeletedResponse,
    MemoryKeysResponse,
    MemoryStoredResponse,
    MemoryValueResponse,
)
from core.services import MemoryService

router = APIRouter(prefix="/memory", tags=["memory"])


@router.get("", response_model=MemoryKeysResponse)
async def list_keys(
    service: Annotated[MemoryService, Depends(get_memory_service)],
    prefix: str = "",
) -> MemoryKeysResponse:
    return MemoryKeysResponse(keys=await service.list_keys(prefix))


@router.get("/{key:path}", response_model=MemoryValueResponse)
async def get_value(
    key: str, service: Annotated[MemoryService, Depends(get_memory_service)]
) -> MemoryValueResponse:
    found, value = await service.get(key)
    if not found:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Key not found")
    return MemoryValueResponse(key=key, value=value)


@router.put("/{key:path}", response_model=MemoryStoredResponse)
async def put_value(
    key: str,
    request: Request,
    service: Annotated[MemoryService, Depends(get_memory_service)],
    ttl: Annotated[int | None, Query(gt=0)] = None,
) -> MemoryStoredResponse:
    """Store the raw request body under ``key``."""
    body = (await request.body()).decode("utf-8", errors="replace")
    await service.put(key, body, ttl)
    return MemoryStoredResponse(key=key)


@router.delete("/{key:path}", response_model=MemoryDeletedResponse)
async def delete_value(
    key: str, service: Annotated[MemoryService, Depends(get_memory_service)]
) -> MemoryDeletedResponse:
    await service.delete(key)
    return MemoryDeletedResponse(key=key)
