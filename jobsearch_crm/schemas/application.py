"""Application request schemas."""
from typing import Optional

from pydantic import Field

from jobsearch_crm.schemas.common import (
    ApplicationStatus, CamelModel, OptionalDateTime, OptionalText, OptionalUrl
)


class ApplicationCreate(CamelModel):
    position: str = Field(..., min_length=1, max_length=255)
    company: OptionalText = None
    company_id: OptionalText = None
    contact_id: OptionalText = None
    location: OptionalText = None
    salary: OptionalText = None
    job_url: OptionalUrl = None
    description: OptionalText = None
    status: ApplicationStatus = 'APPLIED'
    applied_date: OptionalDateTime = None
    notes: OptionalText = None


class ApplicationUpdate(ApplicationCreate):
    position: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[ApplicationStatus] = None
