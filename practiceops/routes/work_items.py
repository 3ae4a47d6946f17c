from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import FileResponse

from practiceops.application import ImportLimitExceeded, WorkItemNotFound, get_work_item_service
from practiceops.core.service_lines import ServiceLine
from practiceops.core.settings import get_settings
from practiceops.exporters.work_items import EXPORT_FORMATS, export_work_items

router = APIRouter(prefix="/work-items", tags=["work-items"])

GROUP_BY_OPTIONS = {"client_key", "service_line", "assignee", "work_type"}

EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@router.post("/import")
async def import_work_items(payload: dict[str, Any]) -> dict:
    """Store a batch of work items, classifying them on read."""
    items = payload.get("items")
    if not isinstance(items, list) or not items:
        raise HTTPException(status_code=400, detail="items must be a non-empty list")
    source = str(payload.get("source") or "karbon")

    service = get_work_item_service()
    try:
        record = service.import_work_items(items, source=source)
    except ImportLimitExceeded as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    return {
        "import_id": record.import_id,
        "source": record.source,
        "received": record.received,
        "stored": record.stored,
        "skipped": record.skipped,
        "errors": record.errors,
    }


@router.get("")
async def list_work_items(
    service_line: ServiceLine | None = Query(default=None),
    status: str | None = Query(default=None),
    client_key: str | None = Query(default=None),
    assignee: str | None = Query(default=None),
    active: bool | None = Query(default=None),
    q: str | None = Query(default=None),
) -> dict:
    service = get_work_item_service()
    items = service.list_work_items(
        service_line=service_line,
        status=status,
        client_key=client_key,
        assignee=assignee,
        active=active,
        query=q,
    )
    return {"items": [item.model_dump(mode="json") for item in items], "count": len(items)}


@router.get("/counts")
async def get_work_item_counts(group_by: str = Query(default="client_key")) -> dict:
    if group_by not in GROUP_BY_OPTIONS:
        raise HTTPException(status_code=400, detail=f"group_by must be one of {sorted(GROUP_BY_OPTIONS)}")
    service = get_work_item_service()
    counts = service.counts(group_by)
    rows = [
        {"key": getattr(key, "value", key), "total": count.total, "active": count.active}
        for key, count in counts.items()
    ]
    return {"group_by": group_by, "counts": rows}


@router.get("/export")
async def export_work_item_list(fmt: str = Query(default="csv", alias="format")) -> FileResponse:
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail="format must be csv or xlsx")
    service = get_work_item_service()
    target = get_settings().export_dir / f"work_items.{fmt}"
    path = export_work_items(target, service.list_work_items(), fmt)
    return FileResponse(path, media_type=EXPORT_MEDIA_TYPES[fmt], filename=path.name)


@router.get("/{work_item_key}")
async def get_work_item(work_item_key: str) -> dict:
    service = get_work_item_service()
    try:
        item = service.get_work_item(work_item_key)
    except WorkItemNotFound as exc:
        raise HTTPException(status_code=404, detail="work item not found") from exc
    return item.model_dump(mode="json")
