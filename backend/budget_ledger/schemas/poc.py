from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from budget_ledger.schemas.common import PartialUpdate


class POCBase(BaseModel):
    client: str = Field(min_length=1)
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    designation: str = Field(min_length=1)
    active: bool = True


class POCCreate(POCBase):
    pass


class POCUpdate(PartialUpdate):
    non_nullable = ("client", "name", "email", "phone", "designation", "active")

    client: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=1)
    designation: str | None = Field(default=None, min_length=1)
    active: bool | None = None


class POCResponse(POCBase):
    id: str
    client_name: str | None = None  # компания клиента, вычисляется при чтении
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
