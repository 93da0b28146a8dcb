"""Authentication request schemas."""
from pydantic import Field, field_validator

from jobsearch_crm.schemas.common import CamelModel, EMAIL_PATTERN


class RegisterRequest(CamelModel):
    email: str
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        value = value.lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError('Invalid email address')
        return value


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        return value.lower()
