from fastapi import APIRouter, Depends, Query, Request, status

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.models.additional_request import RequestStatus
from budget_ledger.schemas.additional_request import (
    AdditionalRequestCreate,
    AdditionalRequestUpdate,
    AdditionalRequestResponse,
    ApproveRequest,
    RejectRequest,
)
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(prefix="/additional-requests", tags=["additional-requests"])


@router.get("/", response_model=PaginatedResponse[AdditionalRequestResponse])
def get_requests(
    request: Request,
    project: str | None = Query(None, description="Filter by project ID"),
    status_filter: RequestStatus | None = Query(None, alias="status", description="Filter by request status"),
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Запросы на дополнительный бюджет"""
    requests = ledger.list_requests(
        project=project,
        status=status_filter.value if status_filter else None,
    )
    return paginate(request, requests, page)


@router.post("/", response_model=AdditionalRequestResponse, status_code=status.HTTP_201_CREATED)
def create_request(request_data: AdditionalRequestCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Создать запрос (всегда в статусе Pending)"""
    return ledger.create_request(request_data)


@router.get("/{request_id}/", response_model=AdditionalRequestResponse)
def get_request(request_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_request(request_id)


@router.put("/{request_id}/", response_model=AdditionalRequestResponse)
def update_request(
    request_id: str,
    request_update: AdditionalRequestUpdate,
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Изменить запрос, пока он в статусе Pending"""
    return ledger.update_request(request_id, request_update)


@router.delete("/{request_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(request_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    ledger.delete_request(request_id)
    return None


@router.post("/{request_id}/approve/", response_model=AdditionalRequestResponse)
def approve_request(request_id: str, approve_data: ApproveRequest, ledger: BudgetLedger = Depends(get_ledger)):
    """Одобрить запрос"""
    return ledger.approve_request(request_id, approve_data.approved_by)


@router.post("/{request_id}/reject/", response_model=AdditionalRequestResponse)
def reject_request(request_id: str, reject_data: RejectRequest, ledger: BudgetLedger = Depends(get_ledger)):
    """Отклонить запрос с указанием причины"""
    return ledger.reject_request(request_id, reject_data.rejection_reason)
