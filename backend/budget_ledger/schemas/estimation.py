import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, Field
from budget_ledger.models.estimation import ApprovalStatus, POStatus
from budget_ledger.schemas.common import Money, PartialUpdate


class EstimationBase(BaseModel):
    project: str = Field(min_length=1)
    version: str = Field(min_length=1)
    date: dt.date
    provider: str = Field(min_length=1)
    review_date: dt.date | None = None
    client_review_date: dt.date | None = None
    development_amount: Money
    testing_amount: Money
    project_management_amount: Money
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    po_status: POStatus = POStatus.NOT_RECEIVED
    notes: str | None = None


class EstimationCreate(EstimationBase):
    # Принимается для совместимости с формой, но всегда пересчитывается
    total_amount: Decimal | None = None

    class Config:
        use_enum_values = True


class EstimationUpdate(PartialUpdate):
    non_nullable = (
        "project", "version", "date", "provider",
        "development_amount", "testing_amount", "project_management_amount",
        "approval_status", "po_status",
    )

    project: str | None = Field(default=None, min_length=1)
    version: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    provider: str | None = Field(default=None, min_length=1)
    review_date: dt.date | None = None
    client_review_date: dt.date | None = None
    development_amount: Decimal | None = None
    testing_amount: Decimal | None = None
    project_management_amount: Decimal | None = None
    total_amount: Decimal | None = None
    approval_status: ApprovalStatus | None = None
    po_status: POStatus | None = None
    notes: str | None = None


class EstimationResponse(EstimationBase):
    id: str
    total_amount: Money
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
