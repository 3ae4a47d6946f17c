"""Domain entities for the work item store."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ImportRecord:
    """Outcome of one batch of work items pushed into the store."""

    import_id: str
    source: str = "karbon"
    received: int = 0
    stored: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    imported_at: str | None = None


@dataclass(slots=True)
class WorkItemStoreState:
    """In-memory rows keyed by work item key, plus the import history."""

    work_items: dict[str, dict[str, Any]] = field(default_factory=dict)
    imports: list[ImportRecord] = field(default_factory=list)
