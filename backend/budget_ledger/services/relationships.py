"""
Проверка и разрешение связей между сущностями реестра.
"""
import logging
from typing import List, Optional, Tuple

from budget_ledger.core.exceptions import InconsistentReference, ReferenceInUse, ValidationError
from budget_ledger.models import (
    AdditionalRequest,
    Client,
    Estimation,
    Hold,
    Milestone,
    Payment,
    POC,
    Project,
)
from budget_ledger.services.store import EntityStore

logger = logging.getLogger(__name__)


class RelationshipResolver:
    """Внешние ключи при записи и отфильтрованные представления при чтении"""

    def __init__(self, store: EntityStore):
        self.store = store

    def _resolve(self, model, field: str, entity_id: Optional[str]):
        if not entity_id:
            raise ValidationError(f"{field} is required", field=field)
        return self.store.get(model, entity_id)

    def resolve_client(self, client_id: Optional[str]) -> Client:
        return self._resolve(Client, "client", client_id)

    def resolve_poc(self, poc_id: Optional[str]) -> POC:
        return self._resolve(POC, "poc", poc_id)

    def resolve_project(self, project_id: Optional[str]) -> Project:
        return self._resolve(Project, "project", project_id)

    def resolve_payment(self, payment_id: Optional[str]) -> Payment:
        return self._resolve(Payment, "payment", payment_id)

    def check_project_references(self, client_id: Optional[str], poc_id: Optional[str]) -> Tuple[Client, POC]:
        """Клиент и контакт проекта существуют, и контакт принадлежит этому клиенту"""
        client = self.resolve_client(client_id)
        poc = self.resolve_poc(poc_id)
        if poc.client != client.id:
            logger.warning("POC %s belongs to client %s, not %s", poc.id, poc.client, client.id)
            raise InconsistentReference(
                f"POC {poc.id} does not belong to client {client.id}",
                client=client.id,
                poc=poc.id,
                poc_client=poc.client,
            )
        return client, poc

    def check_poc_reassignment(self, poc: POC, new_client_id: str) -> None:
        """Нельзя перевести контакт к другому клиенту, пока на него ссылаются проекты"""
        if new_client_id == poc.client:
            return
        conflicting = [p.id for p in self.store.list(Project, poc=poc.id) if p.client != new_client_id]
        if conflicting:
            raise InconsistentReference(
                f"POC {poc.id} is used by projects of client {poc.client}",
                poc=poc.id,
                projects=conflicting,
            )

    # ========== Защита от висячих ссылок ==========

    def ensure_client_deletable(self, client: Client) -> None:
        if self.store.count(POC, client=client.id):
            raise ReferenceInUse("Client", client.id, "POCs")
        if self.store.count(Project, client=client.id):
            raise ReferenceInUse("Client", client.id, "projects")

    def ensure_poc_deletable(self, poc: POC) -> None:
        if self.store.count(Project, poc=poc.id):
            raise ReferenceInUse("POC", poc.id, "projects")

    # ========== Отфильтрованные представления ==========

    def pocs_by_client(self, client_id: str, active_only: bool = False) -> List[POC]:
        if active_only:
            return self.store.list(POC, client=client_id, active=True)
        return self.store.list(POC, client=client_id)

    def projects_by_client(self, client_id: str) -> List[Project]:
        return self.store.list(Project, client=client_id)

    def estimations_by_project(self, project_id: str) -> List[Estimation]:
        return self.store.list(Estimation, project=project_id)

    def payments_by_project(self, project_id: str) -> List[Payment]:
        return self.store.list(Payment, project=project_id)

    def milestones_by_payment(self, payment_id: str) -> List[Milestone]:
        return self.store.list(Milestone, payment=payment_id)

    def requests_by_project(self, project_id: str) -> List[AdditionalRequest]:
        return self.store.list(AdditionalRequest, project=project_id)

    def holds_by_project(self, project_id: str) -> List[Hold]:
        return self.store.list(Hold, project=project_id)
