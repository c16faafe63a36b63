"""
Фасад бюджетного реестра.

Единая точка входа для API: создание/обновление/удаление сущностей,
отфильтрованные списки и детальная карточка проекта. Каждая операция записи
выполняется одной транзакцией: при любой ошибке делается rollback, частичные
изменения не видны.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from budget_ledger.core.exceptions import ConcurrentUpdate, LedgerError, ValidationError
from budget_ledger.models import (
    AdditionalRequest,
    Client,
    Estimation,
    Hold,
    Milestone,
    MilestoneStatus,
    Payment,
    POC,
    Project,
    RequestStatus,
)
from budget_ledger.schemas import (
    AdditionalRequestCreate,
    AdditionalRequestUpdate,
    ClientCreate,
    ClientUpdate,
    EstimationCreate,
    EstimationUpdate,
    HoldCreate,
    MilestoneCreate,
    MilestoneUpdate,
    PaymentCreate,
    PaymentUpdate,
    POCCreate,
    POCUpdate,
    ProjectCreate,
    ProjectUpdate,
)
from budget_ledger.services.approval import ApprovalWorkflow
from budget_ledger.services.derivation import (
    estimation_total,
    is_budget_exceeded,
    project_budget_summary,
    require_non_negative,
    require_percentage,
)
from budget_ledger.services.relationships import RelationshipResolver
from budget_ledger.services.store import EntityStore

logger = logging.getLogger(__name__)

ESTIMATION_PARTS = ("development_amount", "testing_amount", "project_management_amount")
PAYMENT_AMOUNTS = ("approved_budget", "additional_amount", "payout", "retention", "penalty")


def parse_input(schema, data: Any):
    """
    Привести входные данные (dict или pydantic-схему) к схеме.

    Ошибки pydantic превращаются в доменную ValidationError.
    """
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]) or "__root__", "message": err["msg"]}
            for err in e.errors()
        ]
        message = "; ".join(f"{err['field']}: {err['message']}" for err in errors)
        raise ValidationError(f"Invalid input: {message}", errors=errors)


def _filters(**kwargs: Any) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


class BudgetLedger:
    """Сервис бюджетного реестра, привязанный к сессии БД"""

    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db)
        self.resolver = RelationshipResolver(self.store)
        self.workflow = ApprovalWorkflow(self.store)

    @contextmanager
    def _unit_of_work(self, operation: str):
        try:
            yield
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            logger.warning("%s aborted by a concurrent update: %s", operation, e)
            raise ConcurrentUpdate(f"Record was modified by another request during {operation}") from e
        except LedgerError as e:
            self.db.rollback()
            logger.warning("%s rejected: %s", operation, e.message)
            raise
        except Exception:
            self.db.rollback()
            logger.exception("%s failed", operation)
            raise

    # ========== Клиенты ==========

    def list_clients(self, active: Optional[bool] = None) -> List[Client]:
        return self.store.list(Client, **_filters(active=active))

    def get_client(self, client_id: str) -> Client:
        return self.store.get(Client, client_id)

    def create_client(self, data: Any) -> Client:
        payload = parse_input(ClientCreate, data)
        with self._unit_of_work("create_client"):
            client = self.store.insert(Client, payload.model_dump())
            logger.info("Client %s created (%s)", client.id, client.company)
        return client

    def update_client(self, client_id: str, data: Any) -> Client:
        changes = parse_input(ClientUpdate, data).changes()
        with self._unit_of_work("update_client"):
            client = self.store.get(Client, client_id)
            self.store.update(client, changes)
            logger.info("Client %s updated: %s", client_id, sorted(changes))
        return client

    def delete_client(self, client_id: str) -> None:
        with self._unit_of_work("delete_client"):
            client = self.store.get(Client, client_id)
            self.resolver.ensure_client_deletable(client)
            self.store.delete(Client, client_id)
            logger.info("Client %s deleted", client_id)

    # ========== Контактные лица (POC) ==========

    def list_pocs(self, client: Optional[str] = None, active: Optional[bool] = None) -> List[POC]:
        return self.store.list(POC, **_filters(client=client, active=active))

    def pocs_by_client(self, client_id: str, active_only: bool = False) -> List[POC]:
        return self.resolver.pocs_by_client(client_id, active_only=active_only)

    def get_poc(self, poc_id: str) -> POC:
        return self.store.get(POC, poc_id)

    def create_poc(self, data: Any) -> POC:
        payload = parse_input(POCCreate, data)
        with self._unit_of_work("create_poc"):
            self.resolver.resolve_client(payload.client)
            poc = self.store.insert(POC, payload.model_dump())
            logger.info("POC %s created for client %s", poc.id, poc.client)
        return poc

    def update_poc(self, poc_id: str, data: Any) -> POC:
        changes = parse_input(POCUpdate, data).changes()
        with self._unit_of_work("update_poc"):
            poc = self.store.get(POC, poc_id)
            if "client" in changes:
                self.resolver.resolve_client(changes["client"])
                self.resolver.check_poc_reassignment(poc, changes["client"])
            self.store.update(poc, changes)
            logger.info("POC %s updated: %s", poc_id, sorted(changes))
        return poc

    def delete_poc(self, poc_id: str) -> None:
        with self._unit_of_work("delete_poc"):
            poc = self.store.get(POC, poc_id)
            self.resolver.ensure_poc_deletable(poc)
            self.store.delete(POC, poc_id)
            logger.info("POC %s deleted", poc_id)

    # ========== Проекты ==========

    def list_projects(self, client: Optional[str] = None, status: Optional[str] = None) -> List[Project]:
        return self.store.list(Project, **_filters(client=client, status=status))

    def get_project(self, project_id: str) -> Project:
        return self.store.get(Project, project_id)

    def create_project(self, data: Any) -> Project:
        payload = parse_input(ProjectCreate, data)
        with self._unit_of_work("create_project"):
            self.resolver.check_project_references(payload.client, payload.poc)
            project = self.store.insert(Project, payload.model_dump())
            logger.info("Project %s (%s) created", project.id, project.code)
        return project

    def update_project(self, project_id: str, data: Any) -> Project:
        changes = parse_input(ProjectUpdate, data).changes()
        with self._unit_of_work("update_project"):
            project = self.store.get(Project, project_id)
            if "client" in changes or "poc" in changes:
                self.resolver.check_project_references(
                    changes.get("client", project.client),
                    changes.get("poc", project.poc),
                )
            self.store.update(project, changes)
            logger.info("Project %s updated: %s", project_id, sorted(changes))
        return project

    def delete_project(self, project_id: str) -> None:
        """Удаление проекта вместе с оценками, платежами (и их вехами), запросами и удержаниями"""
        with self._unit_of_work("delete_project"):
            self.store.delete(Project, project_id)
            logger.info("Project %s deleted with its budget records", project_id)

    def get_project_detail(self, project_id: str) -> Dict[str, Any]:
        project = self.store.get(Project, project_id)
        return {
            "project": project,
            "estimations": self.resolver.estimations_by_project(project.id),
            "payments": self.resolver.payments_by_project(project.id),
        }

    def get_project_budget_summary(self, project_id: str) -> Dict[str, Any]:
        project = self.store.get(Project, project_id)
        summary = project_budget_summary(
            self.resolver.estimations_by_project(project.id),
            self.resolver.payments_by_project(project.id),
            self.resolver.requests_by_project(project.id),
            self.resolver.holds_by_project(project.id),
        )
        summary["project"] = project.id
        return summary

    # ========== Оценки ==========

    def estimations_by_project(self, project_id: str) -> List[Estimation]:
        return self.resolver.estimations_by_project(project_id)

    def get_estimation(self, estimation_id: str) -> Estimation:
        return self.store.get(Estimation, estimation_id)

    def create_estimation(self, data: Any) -> Estimation:
        payload = parse_input(EstimationCreate, data)
        # total_amount от клиента не принимаем
        values = payload.model_dump(exclude={"total_amount"})
        values["total_amount"] = estimation_total(*(values[part] for part in ESTIMATION_PARTS))
        with self._unit_of_work("create_estimation"):
            self.resolver.resolve_project(values["project"])
            estimation = self.store.insert(Estimation, values)
            logger.info("Estimation %s created for project %s, total %s",
                        estimation.id, estimation.project, estimation.total_amount)
        return estimation

    def update_estimation(self, estimation_id: str, data: Any) -> Estimation:
        changes = parse_input(EstimationUpdate, data).changes()
        changes.pop("total_amount", None)
        with self._unit_of_work("update_estimation"):
            estimation = self.store.get(Estimation, estimation_id)
            if "project" in changes:
                self.resolver.resolve_project(changes["project"])
            changes["total_amount"] = estimation_total(
                *(changes.get(part, getattr(estimation, part)) for part in ESTIMATION_PARTS)
            )
            self.store.update(estimation, changes)
            logger.info("Estimation %s updated, total %s", estimation_id, changes["total_amount"])
        return estimation

    def delete_estimation(self, estimation_id: str) -> None:
        with self._unit_of_work("delete_estimation"):
            self.store.delete(Estimation, estimation_id)
            logger.info("Estimation %s deleted", estimation_id)

    # ========== Платежи ==========

    @staticmethod
    def _derive_exceeded(values: Dict[str, Any]) -> bool:
        for field in PAYMENT_AMOUNTS:
            require_non_negative(field, values[field])
        require_percentage("utilization_percentage", values["utilization_percentage"])
        return is_budget_exceeded(values["payout"], values["approved_budget"])

    def payments_by_project(self, project_id: str) -> List[Payment]:
        return self.resolver.payments_by_project(project_id)

    def get_payment(self, payment_id: str) -> Payment:
        return self.store.get(Payment, payment_id)

    def create_payment(self, data: Any) -> Payment:
        payload = parse_input(PaymentCreate, data)
        # is_exceeded от клиента не принимаем
        values = payload.model_dump(exclude={"is_exceeded"})
        values["is_exceeded"] = self._derive_exceeded(values)
        with self._unit_of_work("create_payment"):
            self.resolver.resolve_project(values["project"])
            payment = self.store.insert(Payment, values)
            logger.info("Payment %s created for project %s (exceeded=%s)",
                        payment.id, payment.project, payment.is_exceeded)
        return payment

    def update_payment(self, payment_id: str, data: Any) -> Payment:
        changes = parse_input(PaymentUpdate, data).changes()
        changes.pop("is_exceeded", None)
        with self._unit_of_work("update_payment"):
            payment = self.store.get(Payment, payment_id)
            if "project" in changes:
                self.resolver.resolve_project(changes["project"])
            merged = {
                field: changes.get(field, getattr(payment, field))
                for field in PAYMENT_AMOUNTS + ("utilization_percentage",)
            }
            changes["is_exceeded"] = self._derive_exceeded(merged)
            self.store.update(payment, changes)
            logger.info("Payment %s updated (exceeded=%s)", payment_id, changes["is_exceeded"])
        return payment

    def delete_payment(self, payment_id: str) -> None:
        """Удаление платежа вместе с его вехами"""
        with self._unit_of_work("delete_payment"):
            self.store.delete(Payment, payment_id)
            logger.info("Payment %s deleted", payment_id)

    # ========== Вехи ==========

    @staticmethod
    def _check_completion(status: str, completion_date) -> None:
        if completion_date is not None and status != MilestoneStatus.COMPLETED.value:
            raise ValidationError(
                "completion_date can only be set for Completed milestones",
                field="completion_date",
            )

    def list_milestones(self, payment: Optional[str] = None) -> List[Milestone]:
        return self.store.list(Milestone, **_filters(payment=payment))

    def milestones_by_payment(self, payment_id: str) -> List[Milestone]:
        return self.resolver.milestones_by_payment(payment_id)

    def get_milestone(self, milestone_id: str) -> Milestone:
        return self.store.get(Milestone, milestone_id)

    def create_milestone(self, data: Any) -> Milestone:
        payload = parse_input(MilestoneCreate, data)
        values = payload.model_dump()
        require_non_negative("amount", values["amount"])
        self._check_completion(values["status"], values["completion_date"])
        with self._unit_of_work("create_milestone"):
            self.resolver.resolve_payment(values["payment"])
            milestone = self.store.insert(Milestone, values)
            logger.info("Milestone %s created for payment %s", milestone.id, milestone.payment)
        return milestone

    def update_milestone(self, milestone_id: str, data: Any) -> Milestone:
        changes = parse_input(MilestoneUpdate, data).changes()
        if "amount" in changes:
            require_non_negative("amount", changes["amount"])
        with self._unit_of_work("update_milestone"):
            milestone = self.store.get(Milestone, milestone_id)
            if "payment" in changes:
                self.resolver.resolve_payment(changes["payment"])
            self._check_completion(
                changes.get("status", milestone.status),
                changes.get("completion_date", milestone.completion_date),
            )
            self.store.update(milestone, changes)
            logger.info("Milestone %s updated: %s", milestone_id, sorted(changes))
        return milestone

    def delete_milestone(self, milestone_id: str) -> None:
        with self._unit_of_work("delete_milestone"):
            self.store.delete(Milestone, milestone_id)
            logger.info("Milestone %s deleted", milestone_id)

    # ========== Запросы на дополнительный бюджет ==========

    def list_requests(self, project: Optional[str] = None, status: Optional[str] = None) -> List[AdditionalRequest]:
        return self.store.list(AdditionalRequest, **_filters(project=project, status=status))

    def requests_by_project(self, project_id: str) -> List[AdditionalRequest]:
        return self.resolver.requests_by_project(project_id)

    def get_request(self, request_id: str) -> AdditionalRequest:
        return self.store.get(AdditionalRequest, request_id)

    def create_request(self, data: Any) -> AdditionalRequest:
        payload = parse_input(AdditionalRequestCreate, data)
        values = payload.model_dump()
        require_non_negative("requested_amount", values["requested_amount"])
        # Новый запрос всегда в статусе Pending
        values["status"] = RequestStatus.PENDING.value
        with self._unit_of_work("create_request"):
            self.resolver.resolve_project(values["project"])
            request = self.store.insert(AdditionalRequest, values)
            logger.info("Additional request %s for %s created on project %s",
                        request.id, request.requested_amount, request.project)
        return request

    def update_request(self, request_id: str, data: Any) -> AdditionalRequest:
        changes = parse_input(AdditionalRequestUpdate, data).changes()
        if "requested_amount" in changes:
            require_non_negative("requested_amount", changes["requested_amount"])
        with self._unit_of_work("update_request"):
            request = self.store.get(AdditionalRequest, request_id)
            self.workflow.ensure_mutable(request)
            if "project" in changes:
                self.resolver.resolve_project(changes["project"])
            self.store.update(request, changes)
            logger.info("Additional request %s updated: %s", request_id, sorted(changes))
        return request

    def delete_request(self, request_id: str) -> None:
        with self._unit_of_work("delete_request"):
            request = self.store.get(AdditionalRequest, request_id)
            self.workflow.ensure_mutable(request, "delete")
            self.store.delete(AdditionalRequest, request_id)
            logger.info("Additional request %s deleted", request_id)

    def approve_request(self, request_id: str, approved_by: Optional[str]) -> AdditionalRequest:
        with self._unit_of_work("approve_request"):
            return self.workflow.approve(request_id, approved_by)

    def reject_request(self, request_id: str, rejection_reason: Optional[str]) -> AdditionalRequest:
        with self._unit_of_work("reject_request"):
            return self.workflow.reject(request_id, rejection_reason)

    # ========== Удержания ==========

    def holds_by_project(self, project_id: str) -> List[Hold]:
        return self.resolver.holds_by_project(project_id)

    def get_hold(self, hold_id: str) -> Hold:
        return self.store.get(Hold, hold_id)

    def add_hold(self, project_id: str, data: Any) -> Hold:
        payload = parse_input(HoldCreate, data)
        amount = require_non_negative("amount", payload.amount)
        with self._unit_of_work("add_hold"):
            self.resolver.resolve_project(project_id)
            hold = self.store.insert(Hold, {
                "project": project_id,
                "reason": payload.reason,
                "amount": amount,
                "is_active": True,
            })
            logger.info("Hold %s of %s added to project %s", hold.id, amount, project_id)
        return hold

    def release_hold(self, hold_id: str) -> Hold:
        with self._unit_of_work("release_hold"):
            return self.workflow.release_hold(hold_id)
