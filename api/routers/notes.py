"""Note endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from api.dependencies import get_note_service
from api.errors import ApiError
from core.models.api.requests import NoteCreateRequest
from core.models.api.responses import (
    NoteCreatedResponse,
    NoteListResponse,
    NoteUpdatedResponse,
    RecordDeletedResponse,
)
from core.services import NoteService

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=NoteListResponse)
async def list_notes(
    service: Annotated[NoteService, Depends(get_note_service)],
) -> NoteListResponse:
    return NoteListResponse(notes=await service.list())


@router.post("", response_model=NoteCreatedResponse)
async def create_note(
    request: NoteCreateRequest,
    service: Annotated[NoteService, Depends(get_note_service)],
) -> NoteCreatedResponse:
    note_id, note = await service.create_note(request)
    return NoteCreatedResponse(id=note_id, note=note)


@router.put("/{note_id}", response_model=NoteUpdatedResponse)
async def update_note(
    note_id: str,
    updates: Annotated[dict[str, Any], Body()],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> NoteUpdatedResponse:
    result = await service.update(note_id, updates)
    if result is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Note not found")
    key, note = result
    return NoteUpdatedResponse(id=key, note=note)


@router.delete("/{note_id}", response_model=RecordDeletedResponse)
async def delete_note(
    note_id: str, service: Annotated[NoteService, Depends(get_note_service)]
) -> RecordDeletedResponse:
    return RecordDeletedResponse(id=await service.delete(note_id))
