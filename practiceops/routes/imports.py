from __future__ import annotations

from fastapi import APIRouter

from practiceops.application import get_work_item_service

router = APIRouter(prefix="/imports", tags=["imports"])


@router.get("")
async def list_imports() -> dict:
    service = get_work_item_service()
    return {"items": service.list_imports()}
