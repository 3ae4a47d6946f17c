from __future__ import annotations

from fastapi import APIRouter

from practiceops.application import get_work_item_service

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("")
async def list_clients() -> dict:
    """Summarise clients from their work items, most recently active first."""
    service = get_work_item_service()
    clients = [client.model_dump(mode="json") for client in service.client_summaries()]
    return {"clients": clients, "total_count": len(clients)}
