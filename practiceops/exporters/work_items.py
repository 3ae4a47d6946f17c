from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from practiceops.core.schema import ClassifiedWorkItem

EXPORT_FORMATS = {"csv", "xlsx"}

EXPORT_COLUMNS = [
    "work_item_key",
    "title",
    "service_line",
    "client_name",
    "client_key",
    "client_group_name",
    "status",
    "primary_status",
    "work_type",
    "assignee",
    "due_date",
    "modified_date",
    "budgeted_hours",
]


def export_work_items(path: Path, rows: Iterable[ClassifiedWorkItem], fmt: str = "csv") -> Path:
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"unsupported export format: {fmt}")

    records = []
    for row in rows:
        data = row.model_dump(mode="json")
        records.append({column: data.get(column) for column in EXPORT_COLUMNS})
    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "xlsx":
        df.to_excel(path, index=False, sheet_name="Work Items", engine="openpyxl")
    else:
        df.to_csv(path, index=False)
    return path
