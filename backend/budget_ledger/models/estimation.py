from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
import enum
from budget_ledger.core.database import Base


class ApprovalStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class POStatus(str, enum.Enum):
    NOT_RECEIVED = "Not Received"
    RECEIVED = "Received"
    PARTIAL = "Partial"


class Estimation(Base):
    __tablename__ = "estimations"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    project = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)

    version = Column(String(50), nullable=False)  # версия оценки, например "v1.0"
    date = Column(Date, nullable=False)
    provider = Column(String(255), nullable=False)
    review_date = Column(Date, nullable=True)
    client_review_date = Column(Date, nullable=True)

    # Составляющие оценки
    development_amount = Column(Numeric(15, 2), nullable=False)
    testing_amount = Column(Numeric(15, 2), nullable=False)
    project_management_amount = Column(Numeric(15, 2), nullable=False)
    # Расчетное поле: сумма трёх составляющих
    total_amount = Column(Numeric(15, 2), nullable=False)

    approval_status = Column(String(20), default=ApprovalStatus.PENDING.value, nullable=False)
    po_status = Column(String(20), default=POStatus.NOT_RECEIVED.value, nullable=False)
    notes = Column(Text, nullable=True)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    project_ref = relationship("Project", back_populates="estimations")
