"""Domain layer definitions."""

from .work_items import ImportRecord, WorkItemStoreState

__all__ = [
    "ImportRecord",
    "WorkItemStoreState",
]
