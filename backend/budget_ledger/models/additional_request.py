from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
import enum
from budget_ledger.core.database import Base


class RequestStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AdditionalRequest(Base):
    __tablename__ = "additional_requests"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    project = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)

    requested_amount = Column(Numeric(15, 2), nullable=False)
    reason = Column(Text, nullable=False)

    # Статус и аудит
    status = Column(String(20), default=RequestStatus.PENDING.value, nullable=False)
    approved_by = Column(String(255), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    project_ref = relationship("Project", back_populates="additional_requests")

    @property
    def is_terminal(self) -> bool:
        return self.status != RequestStatus.PENDING.value
