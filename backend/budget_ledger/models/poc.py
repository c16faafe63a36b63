from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from budget_ledger.core.database import Base


class POC(Base):
    __tablename__ = "pocs"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    client = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=False)
    designation = Column(String(255), nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    client_ref = relationship("Client", back_populates="pocs")
    projects = relationship("Project", back_populates="poc_ref", order_by="Project.seq")

    @property
    def client_name(self) -> str | None:
        # Название компании клиента берём при чтении, а не храним копию
        return self.client_ref.company if self.client_ref else None
