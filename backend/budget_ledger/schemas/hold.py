from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from budget_ledger.schemas.common import Money


class HoldCreate(BaseModel):
    reason: str = Field(min_length=1)
    amount: Decimal


class HoldResponse(BaseModel):
    id: str
    project: str
    reason: str
    amount: Money
    is_active: bool
    released_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BudgetSummaryResponse(BaseModel):
    project: str
    estimated_total: Money
    approved_estimations: int
    approved_budget: Money
    additional_amount: Money
    payout: Money
    retention: Money
    penalty: Money
    exceeded_payments: int
    approved_requests_amount: Money
    pending_requests_amount: Money
    active_holds_amount: Money
