from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
import enum
from budget_ledger.core.database import Base


class ProjectPriority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ProjectType(str, enum.Enum):
    FIXED_PRICE = "Fixed Price"
    TIME_AND_MATERIAL = "Time & Material"
    RETAINER = "Retainer"


class ProjectStatus(str, enum.Enum):
    PLANNING = "Planning"
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Project(Base):
    __tablename__ = "projects"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    project_name = Column(String(255), nullable=False)
    code = Column(String(64), nullable=False, index=True)
    client = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    poc = Column(String(36), ForeignKey("pocs.id"), nullable=False, index=True)

    # Строки вместо SQLEnum, значения enum хранятся как есть ("Time & Material")
    priority = Column(String(20), default=ProjectPriority.MEDIUM.value, nullable=False)
    type = Column(String(30), default=ProjectType.FIXED_PRICE.value, nullable=False)
    status = Column(String(20), default=ProjectStatus.PLANNING.value, nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)

    row_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    # Relationships
    client_ref = relationship("Client", back_populates="projects")
    poc_ref = relationship("POC", back_populates="projects")
    # Проект владеет бюджетными записями: удаляются вместе с ним
    estimations = relationship(
        "Estimation", back_populates="project_ref", cascade="all, delete-orphan", order_by="Estimation.seq"
    )
    payments = relationship(
        "Payment", back_populates="project_ref", cascade="all, delete-orphan", order_by="Payment.seq"
    )
    additional_requests = relationship(
        "AdditionalRequest", back_populates="project_ref", cascade="all, delete-orphan", order_by="AdditionalRequest.seq"
    )
    holds = relationship(
        "Hold", back_populates="project_ref", cascade="all, delete-orphan", order_by="Hold.seq"
    )

    @property
    def client_name(self) -> str | None:
        return self.client_ref.company if self.client_ref else None

    @property
    def poc_name(self) -> str | None:
        return self.poc_ref.name if self.poc_ref else None
