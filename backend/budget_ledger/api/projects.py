from fastapi import APIRouter, Depends, Query, Request, status
from typing import List

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.models.project import ProjectStatus
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.hold import HoldCreate, HoldResponse, BudgetSummaryResponse
from budget_ledger.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse, ProjectDetailResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=PaginatedResponse[ProjectResponse])
def get_projects(
    request: Request,
    client: str | None = Query(None, description="Filter by client ID"),
    status_filter: ProjectStatus | None = Query(None, alias="status", description="Filter by project status"),
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Список проектов"""
    projects = ledger.list_projects(
        client=client,
        status=status_filter.value if status_filter else None,
    )
    return paginate(request, projects, page)


@router.post("/", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(project_data: ProjectCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Создать проект (контакт должен принадлежать клиенту проекта)"""
    return ledger.create_project(project_data)


@router.get("/{project_id}/", response_model=ProjectResponse)
def get_project(project_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_project(project_id)


@router.put("/{project_id}/", response_model=ProjectResponse)
def update_project(project_id: str, project_update: ProjectUpdate, ledger: BudgetLedger = Depends(get_ledger)):
    """Обновить проект (частично)"""
    return ledger.update_project(project_id, project_update)


@router.delete("/{project_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Удалить проект вместе с бюджетными записями"""
    ledger.delete_project(project_id)
    return None


@router.get("/{project_id}/detail/", response_model=ProjectDetailResponse)
def get_project_detail(project_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Проект с оценками и платежами"""
    return ledger.get_project_detail(project_id)


@router.get("/{project_id}/budget-summary/", response_model=BudgetSummaryResponse)
def get_budget_summary(project_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Сводка по бюджету проекта"""
    return ledger.get_project_budget_summary(project_id)


@router.post("/{project_id}/add-hold/", response_model=HoldResponse, status_code=status.HTTP_201_CREATED)
def add_hold(project_id: str, hold_data: HoldCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Удержать часть бюджета проекта"""
    return ledger.add_hold(project_id, hold_data)


@router.get("/{project_id}/holds/", response_model=List[HoldResponse])
def get_project_holds(project_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.holds_by_project(project_id)
