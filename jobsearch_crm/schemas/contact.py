"""Contact request schemas."""
from typing import Optional

from pydantic import Field

from jobsearch_crm.schemas.common import (
    CamelModel, ContactType, OptionalDateTime, OptionalEmail, OptionalText, OptionalUrl
)


class ContactCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: OptionalEmail = None
    phone: OptionalText = None
    company_id: OptionalText = None
    position: OptionalText = None
    linkedin_url: OptionalUrl = None
    notes: OptionalText = None
    type: ContactType = 'OTHER'
    last_contact: OptionalDateTime = None
    next_contact: OptionalDateTime = None


class ContactUpdate(ContactCreate):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[ContactType] = None
