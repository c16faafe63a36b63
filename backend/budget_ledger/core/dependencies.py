from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from budget_ledger.core.database import get_db
from budget_ledger.services.ledger import BudgetLedger


def get_ledger(db: Session = Depends(get_db)) -> Generator[BudgetLedger, None, None]:
    """Фасад реестра, привязанный к сессии текущего запроса"""
    yield BudgetLedger(db)
