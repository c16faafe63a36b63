from fastapi import APIRouter, Depends, Query, Request, status

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.milestone import MilestoneCreate, MilestoneUpdate, MilestoneResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(prefix="/milestones", tags=["milestones"])


@router.get("/", response_model=PaginatedResponse[MilestoneResponse])
def get_milestones(
    request: Request,
    payment: str | None = Query(None, description="Filter by payment ID"),
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Список вех (опционально по платежу)"""
    return paginate(request, ledger.list_milestones(payment=payment), page)


@router.post("/", response_model=MilestoneResponse, status_code=status.HTTP_201_CREATED)
def create_milestone(milestone_data: MilestoneCreate, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.create_milestone(milestone_data)


@router.get("/{milestone_id}/", response_model=MilestoneResponse)
def get_milestone(milestone_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_milestone(milestone_id)


@router.put("/{milestone_id}/", response_model=MilestoneResponse)
def update_milestone(
    milestone_id: str,
    milestone_update: MilestoneUpdate,
    ledger: BudgetLedger = Depends(get_ledger),
):
    return ledger.update_milestone(milestone_id, milestone_update)


@router.delete("/{milestone_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_milestone(milestone_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    ledger.delete_milestone(milestone_id)
    return None
