"""Infrastructure layer exports."""

from .work_items import InMemoryWorkItemRepository, WorkItemRepository

__all__ = [
    "InMemoryWorkItemRepository",
    "WorkItemRepository",
]
