"""Translate practice-management work item payloads into store rows.

The practice-management API returns PascalCase records (``WorkItemKey``,
``ClientName`` ...); rows already synced into the store use snake_case.
Both shapes are accepted, snake_case wins when a field appears twice.
"""
from __future__ import annotations

from typing import Any

KARBON_FIELD_MAP: dict[str, str] = {
    "WorkItemKey": "work_item_key",
    "WorkKey": "work_item_key",
    "Title": "title",
    "ClientName": "client_name",
    "ClientKey": "client_key",
    "ClientGroupKey": "client_group_key",
    "RelatedClientGroupName": "client_group_name",
    "ContactKey": "contact_key",
    "OrganizationKey": "organization_key",
    "WorkStatus": "work_status",
    "PrimaryStatus": "primary_status",
    "SecondaryStatus": "secondary_status",
    "WorkType": "work_type",
    "AssigneeName": "assignee",
    "AssigneeEmailAddress": "assignee_email",
    "DueDate": "due_date",
    "StartDate": "start_date",
    "CompletedDate": "completed_date",
    "ModifiedDate": "modified_date",
    "LastModifiedDate": "modified_date",
    "Tags": "tags",
}

UNKNOWN = "Unknown"


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _budgeted_hours(raw: dict[str, Any]) -> Any:
    budget = raw.get("Budget")
    if isinstance(budget, dict):
        return budget.get("BudgetedHours")
    return None


def is_karbon_payload(raw: dict[str, Any]) -> bool:
    return any(key in raw for key in ("WorkItemKey", "WorkKey"))


def normalise_work_item(raw: dict[str, Any]) -> dict[str, Any]:
    """Return a snake_case row suitable for :class:`~practiceops.core.schema.WorkItem`."""

    row: dict[str, Any] = {}
    karbon = is_karbon_payload(raw)

    for source, target in KARBON_FIELD_MAP.items():
        if source in raw and row.get(target) is None:
            row[target] = _clean(raw[source])

    for key, value in raw.items():
        if key in KARBON_FIELD_MAP or not key.islower():
            continue
        cleaned = _clean(value)
        if cleaned is not None or key not in row:
            row[key] = cleaned

    if row.get("budgeted_hours") is None:
        hours = _budgeted_hours(raw)
        if hours is not None:
            row["budgeted_hours"] = hours

    work_status = row.pop("work_status", None)
    if karbon:
        work_status = work_status or UNKNOWN
        row["primary_status"] = row.get("primary_status") or UNKNOWN
        row["work_type"] = row.get("work_type") or UNKNOWN
    if not row.get("status"):
        row["status"] = work_status or row.get("primary_status")

    if row.get("tags") is None:
        row.pop("tags", None)
    return row
