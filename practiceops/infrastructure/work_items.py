"""Infrastructure layer for work item persistence."""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Protocol

from practiceops.domain import ImportRecord, WorkItemStoreState


class WorkItemRepository(Protocol):
    """Persistence contract for synced work items."""

    def upsert_work_item(self, record: dict[str, Any]) -> None: ...

    def get_work_item(self, work_item_key: str) -> dict[str, Any] | None: ...

    def list_work_items(self) -> list[dict[str, Any]]: ...

    def next_import_id(self) -> str: ...

    def add_import(self, record: ImportRecord) -> None: ...

    def list_imports(self) -> list[dict[str, Any]]: ...

    def reset(self) -> None: ...


class InMemoryWorkItemRepository:
    """Simple in-memory repository for fast iteration and tests."""

    def __init__(self) -> None:
        self._state = WorkItemStoreState()
        self._import_counter = 0

    def upsert_work_item(self, record: dict[str, Any]) -> None:
        self._state.work_items[record["work_item_key"]] = dict(record)

    def get_work_item(self, work_item_key: str) -> dict[str, Any] | None:
        record = self._state.work_items.get(work_item_key)
        return dict(record) if record is not None else None

    def list_work_items(self) -> list[dict[str, Any]]:
        return [dict(record) for record in self._state.work_items.values()]

    def next_import_id(self) -> str:
        self._import_counter += 1
        return f"import-{self._import_counter:05d}"

    def add_import(self, record: ImportRecord) -> None:
        if record.imported_at is None:
            record.imported_at = datetime.now(timezone.utc).isoformat()
        self._state.imports.append(record)

    def list_imports(self) -> list[dict[str, Any]]:
        history = [asdict(record) for record in self._state.imports]
        history.reverse()
        return history

    def reset(self) -> None:
        self._state = WorkItemStoreState()
        self._import_counter = 0
