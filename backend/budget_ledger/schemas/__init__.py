from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from budget_ledger.schemas.poc import POCCreate, POCUpdate, POCResponse
from budget_ledger.schemas.estimation import EstimationCreate, EstimationUpdate, EstimationResponse
from budget_ledger.schemas.payment import PaymentCreate, PaymentUpdate, PaymentResponse
from budget_ledger.schemas.milestone import MilestoneCreate, MilestoneUpdate, MilestoneResponse
from budget_ledger.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse, ProjectDetailResponse
from budget_ledger.schemas.additional_request import (
    AdditionalRequestCreate,
    AdditionalRequestUpdate,
    AdditionalRequestResponse,
    ApproveRequest,
    RejectRequest,
)
from budget_ledger.schemas.hold import HoldCreate, HoldResponse, BudgetSummaryResponse

__all__ = [
    "PaginatedResponse",
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "POCCreate",
    "POCUpdate",
    "POCResponse",
    "EstimationCreate",
    "EstimationUpdate",
    "EstimationResponse",
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentResponse",
    "MilestoneCreate",
    "MilestoneUpdate",
    "MilestoneResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectDetailResponse",
    "AdditionalRequestCreate",
    "AdditionalRequestUpdate",
    "AdditionalRequestResponse",
    "ApproveRequest",
    "RejectRequest",
    "HoldCreate",
    "HoldResponse",
    "BudgetSummaryResponse",
]
