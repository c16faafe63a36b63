from fastapi import APIRouter, Depends, Query, Request, status

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.poc import POCCreate, POCUpdate, POCResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(prefix="/clients/poc", tags=["pocs"])


@router.get("/", response_model=PaginatedResponse[POCResponse])
def get_pocs(
    request: Request,
    client: str | None = Query(None, description="Filter by client ID"),
    active: bool | None = Query(None, description="Filter by active flag"),
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Список контактных лиц"""
    return paginate(request, ledger.list_pocs(client=client, active=active), page)


@router.post("/", response_model=POCResponse, status_code=status.HTTP_201_CREATED)
def create_poc(poc_data: POCCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Создать контактное лицо клиента"""
    return ledger.create_poc(poc_data)


@router.get("/{poc_id}/", response_model=POCResponse)
def get_poc(poc_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_poc(poc_id)


@router.put("/{poc_id}/", response_model=POCResponse)
def update_poc(poc_id: str, poc_update: POCUpdate, ledger: BudgetLedger = Depends(get_ledger)):
    """Обновить контактное лицо"""
    return ledger.update_poc(poc_id, poc_update)


@router.delete("/{poc_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_poc(poc_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    ledger.delete_poc(poc_id)
    return None
