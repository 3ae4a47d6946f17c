from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from practiceops.core.aggregation import (
    count_by_key,
    count_by_service_line,
    is_active_status,
    sum_by_key,
    summarise_clients,
)
from practiceops.core.schema import WorkItem
from practiceops.core.service_lines import ServiceLine


def test_ten_records_with_same_key():
    statuses = ["In Progress", "Completed", "ready to start", "Waiting on client", "planned",
                "Complete", None, "IN_PROGRESS", "Done", "Ready"]
    records = [{"client_key": "C1", "status": status} for status in statuses]

    counts = count_by_key(records, "client_key")

    assert list(counts) == ["C1"]
    assert counts["C1"].total == 10
    assert counts["C1"].active == sum(1 for status in statuses if is_active_status(status))
    assert counts["C1"].active == 6


def test_empty_input_gives_empty_mapping():
    assert count_by_key([], "client_key") == {}


def test_missing_keys_are_excluded():
    records = [
        {"client_key": None, "status": "In Progress"},
        {"client_key": "", "status": "In Progress"},
        {"status": "Planned"},
        {"client_key": "C2", "status": "Completed"},
    ]
    counts = count_by_key(records, "client_key")
    assert None not in counts
    assert set(counts) == {"C2"}
    assert counts["C2"].total == 1
    assert counts["C2"].active == 0


def test_callable_key_and_models():
    items = [
        WorkItem(work_item_key="1", title="TAX - 1040", status="Planned"),
        WorkItem(work_item_key="2", title="BOOK: March", status="Completed"),
        WorkItem(work_item_key="3", title="TAX | 1065", status="Waiting"),
    ]
    by_line = count_by_service_line(items)
    assert by_line[ServiceLine.TAX].total == 2
    assert by_line[ServiceLine.TAX].active == 2
    assert by_line[ServiceLine.BOOKKEEPING].active == 0

    by_initial = count_by_key(items, lambda item: (item.title or "")[:1])
    assert by_initial["T"].total == 2


def test_sum_by_key_ignores_unusable_values():
    records = [
        {"assignee": "Ana", "budgeted_hours": 2.5},
        {"assignee": "Ana", "budgeted_hours": "1.5"},
        {"assignee": "Ana", "budgeted_hours": "n/a"},
        {"assignee": "Ben", "budgeted_hours": None},
        {"assignee": None, "budgeted_hours": 9},
    ]
    totals = sum_by_key(records, "assignee", "budgeted_hours")
    assert totals == {"Ana": Decimal("4.0"), "Ben": Decimal("0")}


def test_client_summaries():
    records = [
        {
            "client_key": "A",
            "client_name": "Acme",
            "client_group_key": "G1",
            "client_group_name": "Acme Group",
            "title": "TAX - 1120",
            "primary_status": "In Progress",
            "modified_date": "2024-03-01T10:00:00Z",
        },
        {
            "client_key": "A",
            "client_name": "Acme",
            "title": "PROSPECT: upsell",
            "primary_status": "Completed",
            "modified_date": "2024-04-01T10:00:00Z",
        },
        {
            "client_key": "B",
            "client_name": "Beta",
            "client_group_key": "G1",
            "client_group_name": "Acme Group",
            "title": "BOOK: cleanup",
            "primary_status": "Planned",
            "modified_date": "2024-01-15",
        },
        {"client_key": "C", "client_name": "Cobalt", "title": "Random Task"},
        {"client_key": None, "client_name": "Nobody", "title": "TAX"},
    ]

    summaries = summarise_clients(records)

    assert [summary.client_key for summary in summaries] == ["A", "B", "C"]
    acme = summaries[0]
    assert acme.work_item_count == 2
    assert acme.active_work_items == 1
    assert acme.completed_work_items == 1
    assert acme.last_activity == "2024-04-01T10:00:00Z"
    assert acme.is_prospect is True
    assert acme.service_lines_used == [ServiceLine.TAX]
    assert acme.client_group == "Acme Group"
    assert [related.client_key for related in acme.related_clients] == ["B"]

    beta = summaries[1]
    assert beta.related_clients[0].client_name == "Acme"
    assert beta.service_lines_used == [ServiceLine.BOOKKEEPING]

    cobalt = summaries[2]
    assert cobalt.last_activity is None
    assert cobalt.service_lines_used == []
    assert cobalt.is_prospect is False
