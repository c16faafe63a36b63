from fastapi import APIRouter, Depends, Request, status

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.estimation import EstimationCreate, EstimationUpdate, EstimationResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(tags=["estimations"])


@router.get("/project/{project_id}/estimation/", response_model=PaginatedResponse[EstimationResponse])
def get_project_estimations(
    project_id: str,
    request: Request,
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Оценки проекта"""
    return paginate(request, ledger.estimations_by_project(project_id), page)


@router.post("/estimations/", response_model=EstimationResponse, status_code=status.HTTP_201_CREATED)
def create_estimation(estimation_data: EstimationCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Создать оценку; total_amount считается на сервере"""
    return ledger.create_estimation(estimation_data)


@router.get("/estimations/{estimation_id}/", response_model=EstimationResponse)
def get_estimation(estimation_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_estimation(estimation_id)


@router.put("/estimations/{estimation_id}/", response_model=EstimationResponse)
def update_estimation(
    estimation_id: str,
    estimation_update: EstimationUpdate,
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Обновить оценку с пересчётом total_amount"""
    return ledger.update_estimation(estimation_id, estimation_update)


@router.delete("/estimations/{estimation_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_estimation(estimation_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    ledger.delete_estimation(estimation_id)
    return None
