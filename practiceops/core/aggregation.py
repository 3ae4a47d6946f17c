"""Per-key counting and summing over already-fetched work item records.

Records may be plain dicts (rows from the store) or pydantic models; fields
are read by name from either.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Hashable, Iterable, Mapping, Optional, Union

from practiceops.core.schema import AggregateCount, ClientSummary, RelatedClient
from practiceops.core.service_lines import ServiceLine, classify_service_line

ACTIVE_STATUS_TOKENS: tuple[str, ...] = (
    "in progress",
    "ready to start",
    "waiting",
    "planned",
    "in_progress",
    "ready",
    "waiting",
    "planned",
)

ACTIVE_PRIMARY_STATUSES = frozenset({"In Progress", "Ready To Start", "Waiting", "Planned"})
COMPLETED_PRIMARY_STATUS = "Completed"

KeyRule = Union[str, Callable[[Any], Optional[Hashable]]]


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _resolve_key(record: Any, key: KeyRule) -> Hashable | None:
    value = key(record) if callable(key) else _field(record, key)
    if value is None or value == "":
        return None
    return value


def is_active_status(status: str | None) -> bool:
    if not status:
        return False
    lowered = status.lower()
    return any(token in lowered for token in ACTIVE_STATUS_TOKENS)


def count_by_key(
    records: Iterable[Any],
    key: KeyRule,
    *,
    status_field: str = "status",
) -> dict[Hashable, AggregateCount]:
    counts: dict[Hashable, AggregateCount] = {}
    for record in records:
        group = _resolve_key(record, key)
        if group is None:
            continue
        entry = counts.setdefault(group, AggregateCount())
        entry.total += 1
        if is_active_status(_field(record, status_field)):
            entry.active += 1
    return counts


def record_service_line(record: Any) -> ServiceLine:
    return classify_service_line(_field(record, "title"), _field(record, "client_name"))


def count_by_service_line(records: Iterable[Any]) -> dict[ServiceLine, AggregateCount]:
    return count_by_key(records, record_service_line)  # type: ignore[return-value]


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def sum_by_key(records: Iterable[Any], key: KeyRule, value: str) -> dict[Hashable, Decimal]:
    """Sum a numeric field per key; unusable values count as zero."""

    totals: dict[Hashable, Decimal] = {}
    for record in records:
        group = _resolve_key(record, key)
        if group is None:
            continue
        totals[group] = totals.get(group, Decimal("0")) + _to_decimal(_field(record, value))
    return totals


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def summarise_clients(records: Iterable[Any]) -> list[ClientSummary]:
    """Build one summary per client from its work items.

    Only records carrying both a client key and a client name contribute.
    Result is ordered by most recent activity, clients without activity last.
    """

    clients: dict[str, ClientSummary] = {}
    latest: dict[str, datetime] = {}
    groups: dict[str, list[str]] = {}

    for record in records:
        client_key = _field(record, "client_key")
        client_name = _field(record, "client_name")
        if not client_key or not client_name:
            continue

        client = clients.get(client_key)
        if client is None:
            client = ClientSummary(client_key=client_key, client_name=client_name)
            clients[client_key] = client
        client.work_item_count += 1

        group_name = _field(record, "client_group_name")
        group_key = _field(record, "client_group_key")
        if group_name:
            client.client_group = group_name
        if group_key:
            client.client_group_key = group_key

        primary_status = _field(record, "primary_status")
        if primary_status == COMPLETED_PRIMARY_STATUS:
            client.completed_work_items += 1
        elif primary_status in ACTIVE_PRIMARY_STATUSES:
            client.active_work_items += 1

        modified_raw = _field(record, "modified_date")
        modified = parse_timestamp(modified_raw)
        if modified is not None and (client_key not in latest or modified > latest[client_key]):
            latest[client_key] = modified
            client.last_activity = modified_raw

        line = record_service_line(record)
        if line is ServiceLine.PROSPECTS:
            client.is_prospect = True
        elif line is not ServiceLine.OTHER and line not in client.service_lines_used:
            client.service_lines_used.append(line)

        if group_key and group_name:
            members = groups.setdefault(group_key, [])
            if client_key not in members:
                members.append(client_key)

    for members in groups.values():
        for member_key in members:
            client = clients[member_key]
            client.related_clients = [
                RelatedClient(client_key=other, client_name=clients[other].client_name)
                for other in members
                if other != member_key
            ]

    ordered = sorted(clients.values(), key=lambda item: item.client_name.lower())
    ordered.sort(key=lambda item: latest[item.client_key].timestamp() if item.client_key in latest else float("-inf"), reverse=True)
    return ordered
