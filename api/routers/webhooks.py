"""Webhook receiver endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_store, get_webhook_service
from core.constants import UNKNOWN, WEBHOOK_SOURCE_HEADER
from core.models.api.responses import WebhookListResponse, WebhookReceivedResponse
from core.services import WebhookService
from core.storage import KVStore

router = APIRouter(tags=["webhooks"])


@router.post("/webhook", response_model=WebhookReceivedResponse)
async def receive_webhook(
    request: Request,
    service: Annotated[WebhookService, Depends(get_webhook_service)],
) -> WebhookReceivedResponse:
    """Store any payload; acknowledged even when no store is bound."""
    body = (await request.body()).decode("utf-8", errors="replace")
    source = request.headers.get(WEBHOOK_SOURCE_HEADER) or UNKNOWN
    webhook_id, timestamp = await service.receive(source, dict(request.headers), body)
    return WebhookReceivedResponse(id=webhook_id, timestamp=timestamp)


@router.get("/webhooks", response_model=WebhookListResponse)
async def list_webhooks(
    _: Annotated[KVStore, Depends(get_store)],
    service: Annotated[WebhookService, Depends(get_webhook_service)],
) -> WebhookListResponse:
    return WebhookListResponse(webhooks=await service.list())
