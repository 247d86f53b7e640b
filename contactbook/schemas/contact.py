from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
import re


# HTML5 mail address grammar: dot-atom local part, hostname labels
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

CONTACT_FIELDS = ("name", "email", "twitter", "phone")


class ContactBase(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    twitter: Optional[str] = None
    phone: Optional[str] = None


class ValidatedContact(ContactBase):
    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Blank is allowed; anything else must be a well-formed address."""
        if v is None or not v.strip():
            return v
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError('Email is invalid')
        return v


class ContactCreate(ValidatedContact):
    pass


class ContactUpdate(ValidatedContact):
    pass


class ContactCreateRequest(BaseModel):
    contact: ContactCreate


class ContactUpdateRequest(BaseModel):
    contact: ContactUpdate


class ContactResponse(ContactBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class Contact(ContactBase):
    """Client-side contact entry.

    ``id`` stays ``None`` until the server has created the record. ``saving``
    is a display flag owned by the store and never leaves the client.
    """
    id: Optional[int] = None
    saving: bool = Field(default=False, exclude=True)

    def payload(self) -> dict:
        return {"contact": self.model_dump(include=set(CONTACT_FIELDS))}
