from fastapi import APIRouter, Depends

from budget_ledger.core.dependencies import get_ledger
from budget_ledger.schemas.hold import HoldResponse
from budget_ledger.services.ledger import BudgetLedger

router = APIRouter(prefix="/holds", tags=["holds"])


@router.get("/{hold_id}/", response_model=HoldResponse)
def get_hold(hold_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    return ledger.get_hold(hold_id)


@router.post("/{hold_id}/release/", response_model=HoldResponse)
def release_hold(hold_id: str, ledger: BudgetLedger = Depends(get_ledger)):
    """Освободить удержание"""
    return ledger.release_hold(hold_id)
