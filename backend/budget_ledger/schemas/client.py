from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator
from budget_ledger.schemas.common import PartialUpdate, blank_to_none


class ClientBase(BaseModel):
    company: str = Field(min_length=1)
    client_name: str = Field(min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, v):
        return blank_to_none(v)


class ClientCreate(ClientBase):
    pass


class ClientUpdate(PartialUpdate):
    non_nullable = ("company", "client_name", "active")

    company: str | None = Field(default=None, min_length=1)
    client_name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    active: bool | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, v):
        return blank_to_none(v)


class ClientResponse(ClientBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
