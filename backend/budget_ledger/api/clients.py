from fastapi import APIRouter, Depends, Query, Request, status
from typing import List

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.poc import POCResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("/", response_model=PaginatedResponse[ClientResponse])
def get_clients(
    request: Request,
    active: bool | None = Query(None, description="Filter by active flag"),
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Получить список клиентов"""
    return paginate(request, ledger.list_clients(active=active), page)


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(client_data: ClientCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Создать клиента"""
    return ledger.create_client(client_data)


@router.get("/{client_id}/", response_model=ClientResponse)
def get_client(client_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Карточка клиента"""
    return ledger.get_client(client_id)


@router.put("/{client_id}/", response_model=ClientResponse)
def update_client(client_id: str, client_update: ClientUpdate, ledger: BudgetLedger = Depends(get_ledger)):
    """Обновить клиента (частично)"""
    return ledger.update_client(client_id, client_update)


@router.delete("/{client_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Удалить клиента без контактов и проектов"""
    ledger.delete_client(client_id)
    return None


@router.get("/{client_id}/pocs/", response_model=List[POCResponse])
def get_client_pocs(
    client_id: str,
    active_only: bool = Query(False, description="Only active POCs"),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Контактные лица клиента (для выбора в форме проекта)"""
    return ledger.pocs_by_client(client_id, active_only=active_only)
