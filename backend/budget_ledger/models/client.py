from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from budget_ledger.core.database import Base


class Client(Base):
    __tablename__ = "clients"

    seq = Column(Integer, primary_key=True)  # порядок вставки
    id = Column(String(36), unique=True, index=True, nullable=False)
    company = Column(String(255), nullable=False, index=True)
    client_name = Column(String(255), nullable=False)  # контактное лицо
    email = Column(String(255), nullable=True)
    phone = Column(String(64), nullable=True)
    address = Column(Text, nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    pocs = relationship("POC", back_populates="client_ref", order_by="POC.seq")
    projects = relationship("Project", back_populates="client_ref", order_by="Project.seq")
