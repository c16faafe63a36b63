from datetime import date, datetime
from typing import List
from pydantic import BaseModel, Field
from budget_ledger.models.project import ProjectPriority, ProjectType, ProjectStatus
from budget_ledger.schemas.common import PartialUpdate
from budget_ledger.schemas.estimation import EstimationResponse
from budget_ledger.schemas.payment import PaymentResponse


class ProjectBase(BaseModel):
    project_name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    client: str = Field(min_length=1)
    poc: str = Field(min_length=1)
    priority: ProjectPriority = ProjectPriority.MEDIUM
    type: ProjectType = ProjectType.FIXED_PRICE
    start_date: date
    end_date: date | None = None
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING


class ProjectCreate(ProjectBase):
    class Config:
        use_enum_values = True


class ProjectUpdate(PartialUpdate):
    non_nullable = ("project_name", "code", "client", "poc", "priority", "type", "start_date", "status")

    project_name: str | None = Field(default=None, min_length=1)
    code: str | None = Field(default=None, min_length=1)
    client: str | None = Field(default=None, min_length=1)
    poc: str | None = Field(default=None, min_length=1)
    priority: ProjectPriority | None = None
    type: ProjectType | None = None
    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None
    status: ProjectStatus | None = None


class ProjectResponse(ProjectBase):
    id: str
    client_name: str | None = None
    poc_name: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectDetailResponse(BaseModel):
    project: ProjectResponse
    estimations: List[EstimationResponse] = []
    payments: List[PaymentResponse] = []

    class Config:
        from_attributes = True
