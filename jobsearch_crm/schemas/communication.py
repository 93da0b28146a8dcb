"""Communication and follow-up action request schemas."""
from typing import List, Optional

from pydantic import Field

from jobsearch_crm.schemas.common import (
    CamelModel, CommunicationType, OptionalDateTime, OptionalText, Priority, UtcDateTime
)


class FollowUpActionCreate(CamelModel):
    description: str = Field(..., min_length=1)
    due_date: OptionalDateTime = None
    priority: Priority = 'MEDIUM'


class FollowUpActionUpdate(CamelModel):
    description: Optional[str] = Field(None, min_length=1)
    due_date: OptionalDateTime = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None


class CommunicationCreate(CamelModel):
    contact_id: str = Field(..., min_length=1)
    type: CommunicationType
    subject: OptionalText = None
    content: OptionalText = None
    date: UtcDateTime
    duration: Optional[int] = Field(None, gt=0)
    location: OptionalText = None
    follow_up_actions: List[FollowUpActionCreate] = Field(default_factory=list)


class CommunicationUpdate(CamelModel):
    type: Optional[CommunicationType] = None
    subject: OptionalText = None
    content: OptionalText = None
    date: Optional[UtcDateTime] = None
    duration: Optional[int] = Field(None, gt=0)
    location: OptionalText = None
