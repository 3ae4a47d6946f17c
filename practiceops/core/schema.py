from __future__ import annotations

from pydantic import BaseModel, Field, constr

from practiceops.core.service_lines import ServiceLine


class WorkItem(BaseModel):
    work_item_key: constr(strip_whitespace=True, min_length=1)
    title: str | None = None
    client_name: str | None = None
    client_key: str | None = None
    client_group_key: str | None = None
    client_group_name: str | None = None
    contact_key: str | None = None
    organization_key: str | None = None
    status: str | None = None
    primary_status: str | None = None
    secondary_status: str | None = None
    work_type: str | None = None
    assignee: str | None = None
    assignee_email: str | None = None
    due_date: str | None = None
    start_date: str | None = None
    completed_date: str | None = None
    modified_date: str | None = None
    budgeted_hours: float | None = None
    tags: list[str] = Field(default_factory=list)


class ClassifiedWorkItem(WorkItem):
    """Work item annotated with its service line for list and export views."""

    service_line: ServiceLine = ServiceLine.OTHER
    service_line_color: str = ""


class AggregateCount(BaseModel):
    total: int = 0
    active: int = 0


class RelatedClient(BaseModel):
    client_key: str
    client_name: str


class ClientSummary(BaseModel):
    client_key: str
    client_name: str
    client_group: str | None = None
    client_group_key: str | None = None
    work_item_count: int = 0
    active_work_items: int = 0
    completed_work_items: int = 0
    last_activity: str | None = None
    service_lines_used: list[ServiceLine] = Field(default_factory=list)
    related_clients: list[RelatedClient] = Field(default_factory=list)
    is_prospect: bool = False
