from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from budget_ledger.core.database import Base


class Hold(Base):
    """Удержание части бюджета проекта до явного освобождения"""

    __tablename__ = "holds"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    project = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)

    reason = Column(Text, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    released_at = Column(DateTime, nullable=True)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    project_ref = relationship("Project", back_populates="holds")
