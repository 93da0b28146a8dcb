"""
Shared pydantic building blocks.

Request bodies use camelCase keys on the wire; Python code sees snake_case.
"""
import re
from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from jobsearch_crm.utils.constants import (
    PRIORITIES, TASK_CATEGORIES, CONTACT_TYPES, COMMUNICATION_TYPES,
    COMPANY_SIZES, COMPANY_STATUSES, APPLICATION_STATUSES, RESEARCH_TYPES,
    RESEARCH_TARGET_KINDS, RESEARCH_IMPORTANCE, RESEARCH_LINK_TYPES,
)

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
URL_PATTERN = re.compile(r'^https?://[^\s/$.?#][^\s]*$', re.IGNORECASE)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _to_naive_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_email(value):
    if value is not None and not EMAIL_PATTERN.match(value):
        raise ValueError('Invalid email address')
    return value


def _check_url(value):
    if value is not None and not URL_PATTERN.match(value):
        raise ValueError('Invalid URL')
    return value


def _check_founded(value):
    if value is not None and not 1800 <= value <= datetime.utcnow().year:
        raise ValueError(f'Founded year must be between 1800 and {datetime.utcnow().year}')
    return value


UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
OptionalEmail = Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(_check_email)]
OptionalUrl = Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(_check_url)]
Url = Annotated[str, AfterValidator(_check_url)]
OptionalDateTime = Annotated[Optional[UtcDateTime], BeforeValidator(blank_to_none)]
FoundedYear = Annotated[Optional[int], AfterValidator(_check_founded)]

Priority = Literal[PRIORITIES]
TaskCategory = Literal[TASK_CATEGORIES]
ContactType = Literal[CONTACT_TYPES]
CommunicationType = Literal[COMMUNICATION_TYPES]
CompanySize = Literal[COMPANY_SIZES]
CompanyStatus = Literal[COMPANY_STATUSES]
ApplicationStatus = Literal[APPLICATION_STATUSES]
ResearchType = Literal[RESEARCH_TYPES]
ResearchTargetKind = Literal[RESEARCH_TARGET_KINDS]
ResearchImportance = Literal[RESEARCH_IMPORTANCE]
ResearchLinkType = Literal[RESEARCH_LINK_TYPES]
