#!/usr/bin/env python
from __future__ import annotations

import argparse
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path


TITLES = [
    ("TAX - 1040 Prep", "In Progress"),
    ("TAX | 1120 Corporate Return", "Ready To Start"),
    ("BOOK: Monthly reconciliation", "Waiting"),
    ("ACCT - Year end close", "Planned"),
    ("ADV: Entity structure review", "Completed"),
    ("PROSPECT: Discovery call", "Planned"),
    ("WEALTH: Portfolio review", "In Progress"),
    ("Quarterly check-in", "Completed"),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a work item import payload in the practice-management shape")
    parser.add_argument("--output", required=True, help="Output file path (.json)")
    parser.add_argument("--client", default="Jane Doe", help="Client name")
    parser.add_argument("--client-key", default="CLIENT-0001", help="Client key")
    args = parser.parse_args()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    now = datetime.now(timezone.utc)
    items = []
    for index, (title, status) in enumerate(TITLES, start=1):
        items.append(
            {
                "WorkItemKey": f"WK-{index:04d}",
                "Title": title,
                "ClientName": args.client,
                "ClientKey": args.client_key,
                "WorkStatus": status,
                "PrimaryStatus": status,
                "WorkType": "Client Work",
                "ModifiedDate": (now - timedelta(days=index)).isoformat(),
            }
        )

    with output.open("w", encoding="utf-8") as fp:
        json.dump({"source": "sample", "items": items}, fp, indent=2)

    print(f"Sample work item payload written to: {output}")


if __name__ == "__main__":
    main()
