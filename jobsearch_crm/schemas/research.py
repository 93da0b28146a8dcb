"""Research and research link request schemas."""
from typing import List, Optional

from pydantic import Field

from jobsearch_crm.models import ResearchTarget
from jobsearch_crm.schemas.common import (
    CamelModel, OptionalText, ResearchImportance, ResearchLinkType,
    ResearchTargetKind, ResearchType, OptionalUrl, Url,
)


class ResearchTargetIn(CamelModel):
    kind: ResearchTargetKind
    id: str = Field(..., min_length=1)

    def to_target(self):
        return ResearchTarget(self.kind, self.id)


class ResearchLinkCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    url: Url
    description: OptionalText = None
    type: ResearchLinkType = 'OTHER'


class ResearchLinkUpdate(ResearchLinkCreate):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    url: OptionalUrl = None
    type: Optional[ResearchLinkType] = None


class ResearchCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    type: ResearchType = 'GENERAL'
    target: Optional[ResearchTargetIn] = None
    summary: OptionalText = None
    findings: List[str] = Field(default_factory=list)
    notes: OptionalText = None
    importance: ResearchImportance = 'MEDIUM'
    tags: List[str] = Field(default_factory=list)


class ResearchUpdate(ResearchCreate):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    type: Optional[ResearchType] = None
    findings: Optional[List[str]] = None
    importance: Optional[ResearchImportance] = None
    tags: Optional[List[str]] = None
