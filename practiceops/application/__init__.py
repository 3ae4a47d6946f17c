"""Application services."""

from .work_items import (
    ImportLimitExceeded,
    WorkItemNotFound,
    WorkItemService,
    get_work_item_service,
    reset_work_item_state,
)

__all__ = [
    "ImportLimitExceeded",
    "WorkItemNotFound",
    "WorkItemService",
    "get_work_item_service",
    "reset_work_item_state",
]
