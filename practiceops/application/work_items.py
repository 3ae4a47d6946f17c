"""Application service layer for work item classification and reporting."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from practiceops.core.aggregation import (
    count_by_key,
    count_by_service_line,
    is_active_status,
    summarise_clients,
)
from practiceops.core.karbon_fields import normalise_work_item
from practiceops.core.schema import AggregateCount, ClassifiedWorkItem, ClientSummary, WorkItem
from practiceops.core.service_lines import (
    ServiceLine,
    classify_service_line,
    service_line_catalogue,
    service_line_color,
)
from practiceops.core.settings import get_settings
from practiceops.domain import ImportRecord
from practiceops.infrastructure import InMemoryWorkItemRepository, WorkItemRepository

logger = logging.getLogger(__name__)


class WorkItemNotFound(KeyError):
    """Raised when a work item key is not present in the store."""


class ImportLimitExceeded(ValueError):
    """Raised when a single import carries more rows than allowed."""


class WorkItemService:
    """Coordinates work item use cases."""

    GROUP_FIELDS: dict[str, str] = {
        "client_key": "client_key",
        "assignee": "assignee",
        "work_type": "work_type",
    }

    def __init__(self, repository: WorkItemRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # ingestion
    # ------------------------------------------------------------------
    def import_work_items(self, rows: Iterable[dict[str, Any]], *, source: str = "karbon") -> ImportRecord:
        rows = list(rows)
        limit = get_settings().max_import_items
        if len(rows) > limit:
            raise ImportLimitExceeded(f"import carries {len(rows)} rows, limit is {limit}")

        record = ImportRecord(import_id=self._repository.next_import_id(), source=source, received=len(rows))
        for index, raw in enumerate(rows):
            if not isinstance(raw, dict):
                record.skipped += 1
                record.errors.append(f"row {index}: expected an object")
                continue
            try:
                item = WorkItem(**normalise_work_item(raw))
            except ValidationError as exc:
                record.skipped += 1
                record.errors.append(f"row {index}: {exc.errors()[0].get('msg', 'invalid')}")
                continue
            self._repository.upsert_work_item(item.model_dump())
            record.stored += 1

        self._repository.add_import(record)
        if record.skipped:
            logger.warning("import %s skipped %d of %d rows", record.import_id, record.skipped, record.received)
        logger.info("import %s stored %d work items from %s", record.import_id, record.stored, source)
        return record

    def list_imports(self) -> list[dict[str, Any]]:
        return self._repository.list_imports()

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------
    @staticmethod
    def classify(row: dict[str, Any]) -> ClassifiedWorkItem:
        line = classify_service_line(row.get("title"), row.get("client_name"))
        return ClassifiedWorkItem(**row, service_line=line, service_line_color=service_line_color(line))

    def get_work_item(self, work_item_key: str) -> ClassifiedWorkItem:
        row = self._repository.get_work_item(work_item_key)
        if row is None:
            raise WorkItemNotFound(work_item_key)
        return self.classify(row)

    def list_work_items(
        self,
        *,
        service_line: ServiceLine | None = None,
        status: str | None = None,
        client_key: str | None = None,
        assignee: str | None = None,
        active: bool | None = None,
        query: str | None = None,
    ) -> list[ClassifiedWorkItem]:
        items = [self.classify(row) for row in self._repository.list_work_items()]
        if service_line is not None:
            items = [item for item in items if item.service_line is service_line]
        if status:
            keyword = status.strip().lower()
            items = [item for item in items if keyword in (item.status or "").lower()]
        if client_key:
            items = [item for item in items if item.client_key == client_key]
        if assignee:
            keyword = assignee.strip().lower()
            items = [item for item in items if keyword in (item.assignee or "").lower()]
        if active is not None:
            items = [item for item in items if is_active_status(item.status) is active]
        if query:
            keyword = query.strip().lower()
            items = [item for item in items if keyword in (item.title or "").lower()]
        return items

    # ------------------------------------------------------------------
    # aggregates
    # ------------------------------------------------------------------
    def counts(self, group_by: str = "client_key") -> dict[Any, AggregateCount]:
        rows = self._repository.list_work_items()
        if group_by == "service_line":
            return count_by_service_line(rows)  # type: ignore[return-value]
        field_name = self.GROUP_FIELDS.get(group_by)
        if field_name is None:
            raise ValueError(f"unsupported group_by: {group_by}")
        return count_by_key(rows, field_name)

    def client_summaries(self) -> list[ClientSummary]:
        return summarise_clients(self._repository.list_work_items())

    def service_lines(self) -> list[dict[str, object]]:
        counts = count_by_service_line(self._repository.list_work_items())
        catalogue = service_line_catalogue()
        for entry in catalogue:
            count = counts.get(ServiceLine(entry["name"]))
            entry["count"] = count.total if count else 0
        return catalogue

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._repository.reset()


_repository = InMemoryWorkItemRepository()
_service = WorkItemService(_repository)


def get_work_item_service() -> WorkItemService:
    """Return the singleton work item service for the process."""

    return _service


def reset_work_item_state() -> None:
    """Reset the in-memory store (used in tests)."""

    _service.reset()
