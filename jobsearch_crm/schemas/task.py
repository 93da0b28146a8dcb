"""Task request and query schemas."""
from typing import Annotated, Literal, Optional

from pydantic import BeforeValidator, Field

from jobsearch_crm.schemas.common import (
    CamelModel, OptionalDateTime, OptionalText, Priority, TaskCategory, blank_to_none
)
from jobsearch_crm.utils.constants import TASK_STATUS_FILTERS, UNIFIED_TASK_SOURCES


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: OptionalText = None
    due_date: OptionalDateTime = None
    priority: Priority = 'MEDIUM'
    category: TaskCategory = 'OTHER'
    application_id: OptionalText = None
    contact_id: OptionalText = None


class TaskUpdate(TaskCreate):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    priority: Optional[Priority] = None
    category: Optional[TaskCategory] = None
    completed: Optional[bool] = None


class UnifiedTaskQuery(CamelModel):
    """Query string of GET /api/tasks/unified."""
    filter: Annotated[Literal[UNIFIED_TASK_SOURCES], BeforeValidator(lambda v: blank_to_none(v) or 'all')] = 'all'
    priority: Annotated[Optional[Priority], BeforeValidator(blank_to_none)] = None
    status: Annotated[Optional[Literal[TASK_STATUS_FILTERS]], BeforeValidator(blank_to_none)] = None
