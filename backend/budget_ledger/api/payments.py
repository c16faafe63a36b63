from fastapi import APIRouter, Depends, Request, status

from budget_ledger.api.pagination import PageParams, paginate
from budget_ledger.core.dependencies import get_ledger
from budget_ledger.schemas.common import PaginatedResponse
from budget_ledger.schemas.payment import PaymentCreate, PaymentUpdate, PaymentResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(tags=["payments"])


@router.get("/project/{project_id}/payments/", response_model=PaginatedResponse[PaymentResponse])
def get_project_payments(
    project_id: str,
    request: Request,
    page: PageParams = Depends(),
    ledger: BudgetLedger = Depends(get_ledger),
):
    """Платежи проекта со свёрткой по вехам"""
    return paginate(request, ledger.payments_by_project(project_id), page)


@router.post("/payments/", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(payment_data: PaymentCreate, ledger: BudgetLedger = Depends(get_ledger)):
    """Создать платёж; is_exceeded считается на сервере"""
    return ledger.create_payment(payment_data)


@router.get("/payments/{payment_id}/", response_model=PaymentResponse)
def get_payment(payment_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_payment(payment_id)


@router.put("/payments/{payment_id}/", response_model=PaymentResponse)
def update_payment(payment_id: str, payment_update: PaymentUpdate, ledger: BudgetLedger = Depends(get_ledger)):
    """Обновить платёж с пересчётом is_exceeded"""
    return ledger.update_payment(payment_id, payment_update)


@router.delete("/payments/{payment_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(payment_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Удалить платёж вместе с вехами"""
    ledger.delete_payment(payment_id)
    return None
