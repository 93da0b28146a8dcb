"""
Schema of the snapshot document accepted by POST /api/import.

Only names and other required identifiers must be present; everything else is
optional or defaulted. Unknown keys (ids, timestamps from an export) are ignored.
"""
from typing import List, Optional

from pydantic import Field, model_validator

from jobsearch_crm.schemas.common import (
    CamelModel, CommunicationType, CompanySize, CompanyStatus, ContactType,
    FoundedYear, OptionalDateTime, OptionalText, Priority, ResearchImportance,
    ResearchLinkType, ResearchType, TaskCategory, UtcDateTime,
)


class ImportResearchLink(CamelModel):
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: OptionalText = None
    type: ResearchLinkType = 'OTHER'


class ImportResearch(CamelModel):
    title: str = Field(..., min_length=1)
    type: ResearchType = 'COMPANY'
    summary: OptionalText = None
    findings: List[str] = Field(default_factory=list)
    notes: OptionalText = None
    importance: ResearchImportance = 'MEDIUM'
    tags: List[str] = Field(default_factory=list)
    links: List[ImportResearchLink] = Field(default_factory=list)


class ImportCompany(CamelModel):
    name: str = Field(..., min_length=1)
    website: OptionalText = None
    industry: OptionalText = None
    size: Optional[CompanySize] = None
    location: OptionalText = None
    description: OptionalText = None
    notes: OptionalText = None
    founded: FoundedYear = None
    status: Optional[CompanyStatus] = None
    research: List[ImportResearch] = Field(default_factory=list)


class ImportFollowUpAction(CamelModel):
    description: str = Field(..., min_length=1)
    due_date: OptionalDateTime = None
    priority: Priority = 'MEDIUM'
    completed: bool = False


class ImportCommunication(CamelModel):
    type: CommunicationType
    subject: OptionalText = None
    content: OptionalText = None
    date: UtcDateTime
    duration: Optional[int] = None
    location: OptionalText = None
    follow_up_actions: List[ImportFollowUpAction] = Field(default_factory=list)


class ImportNameRef(CamelModel):
    name: Optional[str] = None


class ImportContact(CamelModel):
    name: str = Field(..., min_length=1)
    email: OptionalText = None
    phone: OptionalText = None
    company: OptionalText = None  # legacy free-text label
    company_name: OptionalText = None
    company_ref: Optional[ImportNameRef] = None
    position: OptionalText = None
    linkedin_url: OptionalText = None
    notes: OptionalText = None
    type: ContactType = 'OTHER'
    communications: List[ImportCommunication] = Field(default_factory=list)

    @model_validator(mode='after')
    def company_name_from_ref(self):
        # Export documents carry companyRef instead of companyName
        if not self.company_name and self.company_ref and self.company_ref.name:
            self.company_name = self.company_ref.name
        return self


class ImportTask(CamelModel):
    title: str = Field(..., min_length=1)
    description: OptionalText = None
    priority: Priority = 'MEDIUM'
    category: TaskCategory = 'OTHER'
    due_date: OptionalDateTime = None
    completed: bool = False
    contact_name: OptionalText = None
    contact: Optional[ImportNameRef] = None

    @model_validator(mode='after')
    def contact_name_from_ref(self):
        if not self.contact_name and self.contact and self.contact.name:
            self.contact_name = self.contact.name
        return self


class ImportDocument(CamelModel):
    companies: List[ImportCompany] = Field(default_factory=list)
    contacts: List[ImportContact] = Field(default_factory=list)
    tasks: List[ImportTask] = Field(default_factory=list)

    @model_validator(mode='before')
    @classmethod
    def unwrap_export(cls, data):
        # A full export document nests the graph under userData
        if isinstance(data, dict) and isinstance(data.get('userData'), dict):
            return data['userData']
        return data
