from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from budget_ledger.models.additional_request import RequestStatus
from budget_ledger.schemas.common import Money, PartialUpdate


class AdditionalRequestCreate(BaseModel):
    project: str = Field(min_length=1)
    requested_amount: Decimal
    reason: str = Field(min_length=1)


class AdditionalRequestUpdate(PartialUpdate):
    # Статус меняется только через approve/reject
    class Config:
        extra = "forbid"

    non_nullable = ("project", "requested_amount", "reason")

    project: str | None = Field(default=None, min_length=1)
    requested_amount: Decimal | None = None
    reason: str | None = Field(default=None, min_length=1)


class ApproveRequest(BaseModel):
    approved_by: str


class RejectRequest(BaseModel):
    rejection_reason: str


class AdditionalRequestResponse(BaseModel):
    id: str
    project: str
    requested_amount: Money
    reason: str
    status: RequestStatus
    approved_by: str | None = None
    approved_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
