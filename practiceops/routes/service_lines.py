from __future__ import annotations

from fastapi import APIRouter, HTTPException

from practiceops.application import get_work_item_service
from practiceops.core.service_lines import classify_service_line, service_line_color

router = APIRouter(prefix="/service-lines", tags=["service-lines"])


@router.get("")
async def list_service_lines() -> dict:
    service = get_work_item_service()
    return {"items": service.service_lines()}


@router.post("/classify")
async def classify_title(payload: dict) -> dict:
    if "title" not in payload:
        raise HTTPException(status_code=400, detail="title is required")
    title = payload.get("title")
    client_name = payload.get("client_name")
    line = classify_service_line(
        str(title) if title is not None else None,
        str(client_name) if client_name is not None else None,
    )
    return {"service_line": line.value, "color": service_line_color(line)}
