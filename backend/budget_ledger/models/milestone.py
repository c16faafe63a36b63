from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
import enum
from budget_ledger.core.database import Base


class MilestoneStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class Milestone(Base):
    __tablename__ = "milestones"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    payment = Column(String(36), ForeignKey("payments.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(20), default=MilestoneStatus.PENDING.value, nullable=False)
    completion_date = Column(Date, nullable=True)  # только для status == Completed
    notes = Column(Text, nullable=True)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    payment_ref = relationship("Payment", back_populates="milestones")
