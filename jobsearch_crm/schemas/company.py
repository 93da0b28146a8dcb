"""Company request schemas."""
from typing import Optional

from pydantic import Field

from jobsearch_crm.schemas.common import (
    CamelModel, CompanySize, CompanyStatus, FoundedYear, OptionalText, OptionalUrl
)


class CompanyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    website: OptionalUrl = None
    industry: OptionalText = None
    size: Optional[CompanySize] = None
    location: OptionalText = None
    description: OptionalText = None
    notes: OptionalText = None
    founded: FoundedYear = None
    status: Optional[CompanyStatus] = None


class CompanyUpdate(CompanyCreate):
    name: Optional[str] = Field(None, min_length=1, max_length=255)


class FindOrCreateCompany(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
