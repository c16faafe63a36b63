"""
Жизненный цикл запросов на дополнительный бюджет и удержаний.

    Pending -> Approved  (конечный)
    Pending -> Rejected  (конечный)

Одобрение не меняет бюджет проекта: это только изменение самой записи.
"""
import logging
from typing import Dict, Set

from budget_ledger.core.clock import utcnow
from budget_ledger.core.exceptions import InvalidTransition, ValidationError
from budget_ledger.models import AdditionalRequest, Hold, RequestStatus
from budget_ledger.services.store import EntityStore

logger = logging.getLogger(__name__)


class ApprovalWorkflow:
    """Переходы статусов AdditionalRequest с аудиторскими полями"""

    STATUS_TRANSITIONS: Dict[str, Set[str]] = {
        RequestStatus.PENDING.value: {RequestStatus.APPROVED.value, RequestStatus.REJECTED.value},
        RequestStatus.APPROVED.value: set(),
        RequestStatus.REJECTED.value: set(),
    }

    def __init__(self, store: EntityStore):
        self.store = store

    @classmethod
    def can_transition(cls, current_status: str, new_status: str) -> bool:
        return new_status in cls.STATUS_TRANSITIONS.get(current_status, set())

    def _check_transition(self, request: AdditionalRequest, new_status: str, action: str) -> None:
        if not self.can_transition(request.status, new_status):
            logger.warning("Rejected %s of request %s in status %s", action, request.id, request.status)
            raise InvalidTransition("AdditionalRequest", request.id, request.status, action)

    def ensure_mutable(self, request: AdditionalRequest, action: str = "update") -> None:
        """Запрос в конечном статусе нельзя менять и удалять"""
        if request.is_terminal:
            raise InvalidTransition("AdditionalRequest", request.id, request.status, action)

    def approve(self, request_id: str, approved_by: str | None) -> AdditionalRequest:
        request = self.store.get(AdditionalRequest, request_id)
        self._check_transition(request, RequestStatus.APPROVED.value, "approve")

        approver = (approved_by or "").strip()
        if not approver:
            raise ValidationError("approved_by is required", field="approved_by")

        self.store.update(request, {
            "status": RequestStatus.APPROVED.value,
            "approved_by": approver,
            "approved_at": utcnow(),
            "rejection_reason": None,
        })
        logger.info("Additional request %s approved by %s", request.id, approver)
        return request

    def reject(self, request_id: str, rejection_reason: str | None) -> AdditionalRequest:
        request = self.store.get(AdditionalRequest, request_id)
        self._check_transition(request, RequestStatus.REJECTED.value, "reject")

        reason = (rejection_reason or "").strip()
        if not reason:
            raise ValidationError("rejection_reason is required", field="rejection_reason")

        self.store.update(request, {
            "status": RequestStatus.REJECTED.value,
            "rejection_reason": reason,
            "approved_by": None,
            "approved_at": None,
        })
        logger.info("Additional request %s rejected", request.id)
        return request

    def release_hold(self, hold_id: str) -> Hold:
        """Освободить удержание; повторное освобождение запрещено"""
        hold = self.store.get(Hold, hold_id)
        if not hold.is_active:
            raise InvalidTransition("Hold", hold.id, "Released", "release")

        self.store.update(hold, {"is_active": False, "released_at": utcnow()})
        logger.info("Hold %s on project %s released", hold.id, hold.project)
        return hold
