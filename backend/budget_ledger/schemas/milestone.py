from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from budget_ledger.models.milestone import MilestoneStatus
from budget_ledger.schemas.common import Money, PartialUpdate


class MilestoneBase(BaseModel):
    payment: str = Field(min_length=1)
    name: str = Field(min_length=1)
    amount: Money
    due_date: date
    status: MilestoneStatus = MilestoneStatus.PENDING
    completion_date: date | None = None
    notes: str | None = None


class MilestoneCreate(MilestoneBase):
    class Config:
        use_enum_values = True


class MilestoneUpdate(PartialUpdate):
    non_nullable = ("payment", "name", "amount", "due_date", "status")

    payment: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    amount: Decimal | None = None
    due_date: date | None = None
    status: MilestoneStatus | None = None
    completion_date: date | None = None
    notes: str | None = None


class MilestoneResponse(MilestoneBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
