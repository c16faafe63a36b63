from decimal import Decimal
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import enum
from budget_ledger.core.database import Base


class PaymentType(str, enum.Enum):
    DEVELOPMENT = "Development"
    TESTING = "Testing"
    PROJECT_MANAGEMENT = "Project Management"
    OTHER = "Other"


class Currency(str, enum.Enum):
    USD = "USD"
    EUR = "EUR"
    INR = "INR"


class Payment(Base):
    __tablename__ = "payments"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    project = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)

    payment_type = Column(String(30), default=PaymentType.DEVELOPMENT.value, nullable=False)
    resource = Column(String(255), nullable=False)
    currency = Column(String(3), default=Currency.USD.value, nullable=False)

    approved_budget = Column(Numeric(15, 2), nullable=False)
    additional_amount = Column(Numeric(15, 2), default=0, nullable=False)
    payout = Column(Numeric(15, 2), nullable=False)
    retention = Column(Numeric(15, 2), default=0, nullable=False)
    penalty = Column(Numeric(15, 2), default=0, nullable=False)
    utilization_percentage = Column(Numeric(5, 2), default=0, nullable=False)
    # Расчетное поле: payout > approved_budget
    is_exceeded = Column(Boolean, default=False, nullable=False)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    project_ref = relationship("Project", back_populates="payments")
    milestones = relationship(
        "Milestone", back_populates="payment_ref", cascade="all, delete-orphan", order_by="Milestone.seq"
    )

    @property
    def total_milestone_value(self) -> Decimal:
        from budget_ledger.services.derivation import milestone_rollup

        return milestone_rollup(self.milestones)["total_value"]

    @property
    def completed_milestone_value(self) -> Decimal:
        from budget_ledger.services.derivation import milestone_rollup

        return milestone_rollup(self.milestones)["completed_value"]
