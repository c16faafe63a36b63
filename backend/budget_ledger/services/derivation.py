"""
Расчёт производных бюджетных показателей.

Чистые функции без побочных эффектов: вызываются при каждом создании и
обновлении оценок и платежей, а свёртки по вехам считаются при чтении.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable

from budget_ledger.core.exceptions import InvalidAmount
from budget_ledger.models.additional_request import RequestStatus
from budget_ledger.models.estimation import ApprovalStatus
from budget_ledger.models.milestone import MilestoneStatus

ZERO = Decimal("0")
HUNDRED = Decimal("100")
# Суммы хранятся в Numeric(15, 2)
CENT = Decimal("0.01")


def to_decimal(field: str, value: Any) -> Decimal:
    """Привести значение к Decimal (float через str, чтобы не тянуть двоичный хвост)"""
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        raise InvalidAmount(field, value, reason="must be a number")
    try:
        return Decimal(str(value))
    except (ValueError, InvalidOperation):
        raise InvalidAmount(field, value, reason="must be a number")


def require_non_negative(field: str, value: Any) -> Decimal:
    """Неотрицательная сумма, не больше двух знаков после запятой"""
    amount = to_decimal(field, value)
    if not amount.is_finite() or amount < ZERO:
        raise InvalidAmount(field, value)
    if amount.normalize().as_tuple().exponent < CENT.as_tuple().exponent:
        raise InvalidAmount(field, value, reason="must have at most 2 decimal places")
    return amount


def require_percentage(field: str, value: Any) -> Decimal:
    """Процент в диапазоне 0..100"""
    percent = require_non_negative(field, value)
    if percent > HUNDRED:
        raise InvalidAmount(field, value, reason="must be between 0 and 100")
    return percent


def estimation_total(
    development_amount: Any,
    testing_amount: Any,
    project_management_amount: Any,
) -> Decimal:
    """
    Итог оценки = разработка + тестирование + управление проектом.

    Отрицательные составляющие отклоняются до расчёта.
    """
    development = require_non_negative("development_amount", development_amount)
    testing = require_non_negative("testing_amount", testing_amount)
    management = require_non_negative("project_management_amount", project_management_amount)
    return development + testing + management


def is_budget_exceeded(payout: Any, approved_budget: Any) -> bool:
    """Превышение бюджета: выплата больше утверждённого бюджета"""
    return require_non_negative("payout", payout) > require_non_negative("approved_budget", approved_budget)


def milestone_rollup(milestones: Iterable) -> Dict[str, Decimal]:
    """Общая стоимость вех и стоимость завершённых вех"""
    total_value = ZERO
    completed_value = ZERO
    for milestone in milestones:
        amount = to_decimal("amount", milestone.amount)
        total_value += amount
        if milestone.status == MilestoneStatus.COMPLETED.value:
            completed_value += amount
    return {"total_value": total_value, "completed_value": completed_value}


def project_budget_summary(
    estimations: Iterable,
    payments: Iterable,
    requests: Iterable,
    holds: Iterable,
) -> Dict[str, Any]:
    """
    Сводка по бюджету проекта.

    Одобренные запросы на доп. бюджет показываются отдельной строкой и не
    прибавляются к утверждённому бюджету платежей.
    """
    summary: Dict[str, Any] = {
        "estimated_total": ZERO,
        "approved_estimations": 0,
        "approved_budget": ZERO,
        "additional_amount": ZERO,
        "payout": ZERO,
        "retention": ZERO,
        "penalty": ZERO,
        "exceeded_payments": 0,
        "approved_requests_amount": ZERO,
        "pending_requests_amount": ZERO,
        "active_holds_amount": ZERO,
    }

    for estimation in estimations:
        if estimation.approval_status == ApprovalStatus.APPROVED.value:
            summary["estimated_total"] += to_decimal("total_amount", estimation.total_amount)
            summary["approved_estimations"] += 1

    for payment in payments:
        for field in ("approved_budget", "additional_amount", "payout", "retention", "penalty"):
            summary[field] += to_decimal(field, getattr(payment, field))
        if payment.is_exceeded:
            summary["exceeded_payments"] += 1

    for request in requests:
        if request.status == RequestStatus.APPROVED.value:
            summary["approved_requests_amount"] += to_decimal("requested_amount", request.requested_amount)
        elif request.status == RequestStatus.PENDING.value:
            summary["pending_requests_amount"] += to_decimal("requested_amount", request.requested_amount)

    for hold in holds:
        if hold.is_active:
            summary["active_holds_amount"] += to_decimal("amount", hold.amount)

    return summary
