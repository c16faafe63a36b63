from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from budget_ledger.models.payment import PaymentType, Currency
from budget_ledger.schemas.common import Money, PartialUpdate


class PaymentBase(BaseModel):
    project: str = Field(min_length=1)
    payment_type: PaymentType = PaymentType.DEVELOPMENT
    resource: str = Field(min_length=1)
    currency: Currency = Currency.USD
    approved_budget: Money
    additional_amount: Money = Decimal("0")
    payout: Money
    retention: Money = Decimal("0")
    penalty: Money = Decimal("0")
    utilization_percentage: Money = Decimal("0")


class PaymentCreate(PaymentBase):
    # Игнорируется: is_exceeded всегда вычисляется на сервере
    is_exceeded: bool | None = None

    class Config:
        use_enum_values = True


class PaymentUpdate(PartialUpdate):
    non_nullable = (
        "project", "payment_type", "resource", "currency", "approved_budget",
        "additional_amount", "payout", "retention", "penalty", "utilization_percentage",
    )

    project: str | None = Field(default=None, min_length=1)
    payment_type: PaymentType | None = None
    resource: str | None = Field(default=None, min_length=1)
    currency: Currency | None = None
    approved_budget: Decimal | None = None
    additional_amount: Decimal | None = None
    payout: Decimal | None = None
    retention: Decimal | None = None
    penalty: Decimal | None = None
    utilization_percentage: Decimal | None = None
    is_exceeded: bool | None = None


class PaymentResponse(PaymentBase):
    id: str
    is_exceeded: bool
    # Свёртка по вехам, считается при чтении
    total_milestone_value: Money = Decimal("0")
    completed_milestone_value: Money = Decimal("0")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
