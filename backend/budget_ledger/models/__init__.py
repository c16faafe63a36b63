from budget_ledger.models.client import Client
from budget_ledger.models.poc import POC
from budget_ledger.models.project import Project, ProjectPriority, ProjectType, ProjectStatus
from budget_ledger.models.estimation import Estimation, ApprovalStatus, POStatus
from budget_ledger.models.payment import Payment, PaymentType, Currency
from budget_ledger.models.milestone import Milestone, MilestoneStatus
from budget_ledger.models.additional_request import AdditionalRequest, RequestStatus
from budget_ledger.models.hold import Hold

__all__ = [
    "Client",
    "POC",
    "Project",
    "ProjectPriority",
    "ProjectType",
    "ProjectStatus",
    "Estimation",
    "ApprovalStatus",
    "POStatus",
    "Payment",
    "PaymentType",
    "Currency",
    "Milestone",
    "MilestoneStatus",
    "AdditionalRequest",
    "RequestStatus",
    "Hold",
]
