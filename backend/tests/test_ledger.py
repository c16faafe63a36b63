"""
Фасад реестра: производные поля, каскадное удаление, транзакционность.
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from budget_ledger.core.database import Base, build_engine
from budget_ledger.core.exceptions import (
    ConcurrentUpdate,
    EntityNotFound,
    InvalidAmount,
    NotFound,
    ValidationError,
)
from budget_ledger.models import AdditionalRequest, Estimation, Hold, Milestone, Payment
from budget_ledger.services.ledger import BudgetLedger


class TestEstimations:

    def test_total_is_derived(self, factory):
        estimation = factory.estimation(factory.project())
        assert estimation.total_amount == Decimal("105000")

    def test_supplied_total_is_ignored(self, factory):
        estimation = factory.estimation(factory.project(), total_amount=1)
        assert estimation.total_amount == Decimal("105000")

    def test_total_recomputed_on_partial_update(self, ledger, factory):
        estimation = factory.estimation(factory.project())
        updated = ledger.update_estimation(estimation.id, {"testing_amount": 20000, "total_amount": 5})
        assert updated.total_amount == Decimal("110000")
        assert updated.development_amount == Decimal("80000")

    def test_sub_cent_parts_rejected(self, ledger, factory):
        project = factory.project()
        with pytest.raises(InvalidAmount):
            factory.estimation(project, development_amount="0.005", testing_amount="0.005", project_management_amount="0")
        assert ledger.estimations_by_project(project.id) == []

    def test_sub_cent_update_rejected_and_total_holds_on_reread(self, ledger, factory, db):
        estimation = factory.estimation(factory.project(), development_amount="80000.25")
        with pytest.raises(InvalidAmount):
            ledger.update_estimation(estimation.id, {"testing_amount": "15000.004"})

        db.expire_all()
        stored = ledger.get_estimation(estimation.id)
        parts = stored.development_amount + stored.testing_amount + stored.project_management_amount
        assert stored.total_amount == parts == Decimal("105000.25")

    def test_negative_part_rejected_without_side_effects(self, ledger, factory):
        project = factory.project()
        with pytest.raises(InvalidAmount):
            factory.estimation(project, testing_amount=-1)
        assert ledger.estimations_by_project(project.id) == []

    def test_missing_required_field(self, ledger, factory):
        project = factory.project()
        with pytest.raises(ValidationError) as exc_info:
            ledger.create_estimation({"project": project.id, "version": "v1.0"})
        fields = {err["field"] for err in exc_info.value.details["errors"]}
        assert "provider" in fields

    def test_unknown_project(self, ledger):
        with pytest.raises(EntityNotFound):
            ledger.create_estimation({
                "project": "missing",
                "version": "v1.0",
                "date": "2024-01-10",
                "provider": "TechTeam Solutions",
                "development_amount": 1,
                "testing_amount": 1,
                "project_management_amount": 1,
            })


class TestPayments:

    def test_not_exceeded(self, factory):
        payment = factory.payment(factory.project())
        assert payment.is_exceeded is False

    def test_exceeded_after_update(self, ledger, factory):
        payment = factory.payment(factory.project())
        updated = ledger.update_payment(payment.id, {"payout": 55000})
        assert updated.is_exceeded is True
        # остальные поля не тронуты
        assert updated.approved_budget == Decimal("50000")

    def test_supplied_flag_is_ignored(self, ledger, factory):
        payment = factory.payment(factory.project(), is_exceeded=True)
        assert payment.is_exceeded is False
        assert ledger.update_payment(payment.id, {"is_exceeded": True}).is_exceeded is False

    def test_budget_raise_clears_flag(self, ledger, factory):
        payment = factory.payment(factory.project(), payout=55000)
        assert payment.is_exceeded is True
        assert ledger.update_payment(payment.id, {"approved_budget": 60000}).is_exceeded is False

    def test_negative_amount_rejected(self, factory):
        with pytest.raises(InvalidAmount):
            factory.payment(factory.project(), retention=-5)

    def test_sub_cent_payout_rejected(self, ledger, factory):
        project = factory.project()
        with pytest.raises(InvalidAmount) as exc_info:
            factory.payment(project, approved_budget="50000", payout="50000.004")
        assert exc_info.value.field == "payout"
        assert ledger.payments_by_project(project.id) == []

    def test_exceeded_flag_holds_on_reread(self, ledger, factory, db):
        payment = factory.payment(factory.project(), approved_budget="50000", payout="50000.01")
        with pytest.raises(InvalidAmount):
            ledger.update_payment(payment.id, {"approved_budget": "50000.005"})

        db.expire_all()
        stored = ledger.get_payment(payment.id)
        assert stored.is_exceeded is True
        assert stored.is_exceeded == (stored.payout > stored.approved_budget)

    def test_utilization_out_of_range(self, factory):
        with pytest.raises(InvalidAmount):
            factory.payment(factory.project(), utilization_percentage=150)

    def test_null_for_required_field_rejected(self, ledger, factory):
        payment = factory.payment(factory.project())
        with pytest.raises(ValidationError):
            ledger.update_payment(payment.id, {"payout": None})

    def test_milestone_rollup(self, ledger, factory):
        payment = factory.payment(factory.project())
        factory.milestone(payment, status="Completed", completion_date=date(2024, 2, 10))
        factory.milestone(payment, name="User Authentication Module", amount=20000, status="In Progress")
        factory.milestone(payment, name="Product Catalog", amount=10000)

        payment = ledger.get_payment(payment.id)
        assert payment.total_milestone_value == Decimal("45000")
        assert payment.completed_milestone_value == Decimal("15000")


class TestMilestones:

    def test_completion_date_requires_completed_status(self, factory):
        payment = factory.payment(factory.project())
        with pytest.raises(ValidationError):
            factory.milestone(payment, status="Pending", completion_date=date(2024, 2, 10))

    def test_status_change_away_from_completed_keeps_rule(self, ledger, factory):
        payment = factory.payment(factory.project())
        milestone = factory.milestone(payment, status="Completed", completion_date=date(2024, 2, 10))
        with pytest.raises(ValidationError):
            ledger.update_milestone(milestone.id, {"status": "In Progress"})
        updated = ledger.update_milestone(milestone.id, {"status": "In Progress", "completion_date": None})
        assert updated.completion_date is None

    def test_negative_amount(self, factory):
        payment = factory.payment(factory.project())
        with pytest.raises(InvalidAmount):
            factory.milestone(payment, amount=-1)

    def test_list_by_payment(self, ledger, factory):
        project = factory.project()
        first = factory.payment(project)
        second = factory.payment(project, resource="QA Team")
        m1 = factory.milestone(first)
        factory.milestone(second, name="Regression Suite")
        assert [m.id for m in ledger.list_milestones(payment=first.id)] == [m1.id]
        assert len(ledger.list_milestones()) == 2


class TestDeletion:

    def test_project_delete_cascades(self, ledger, factory, db):
        project = factory.project()
        factory.estimation(project)
        payment = factory.payment(project)
        factory.milestone(payment)
        factory.request(project)
        ledger.add_hold(project.id, {"reason": "Awaiting PO", "amount": 1000})

        ledger.delete_project(project.id)

        for model in (Estimation, Payment, Milestone, AdditionalRequest, Hold):
            assert db.query(model).count() == 0
        # клиент и контакт остаются
        assert ledger.list_clients()
        assert ledger.list_pocs()

    def test_payment_delete_cascades_to_milestones(self, ledger, factory):
        payment = factory.payment(factory.project())
        milestone = factory.milestone(payment)
        ledger.delete_payment(payment.id)
        with pytest.raises(EntityNotFound):
            ledger.get_milestone(milestone.id)

    @pytest.mark.parametrize("operation", [
        "delete_client", "delete_poc", "delete_project", "delete_estimation",
        "delete_payment", "delete_milestone", "delete_request",
    ])
    def test_delete_unknown_id(self, ledger, operation):
        with pytest.raises(NotFound):
            getattr(ledger, operation)("missing")

    def test_delete_twice(self, ledger, factory):
        estimation = factory.estimation(factory.project())
        ledger.delete_estimation(estimation.id)
        with pytest.raises(NotFound):
            ledger.delete_estimation(estimation.id)


class TestUpdates:

    def test_partial_update_preserves_identity(self, ledger, factory):
        client = factory.client(phone="+1-555-0123")
        created_at = client.created_at
        updated = ledger.update_client(client.id, {"company": "TechCorp Global"})
        assert updated.id == client.id
        assert updated.created_at == created_at
        assert updated.phone == "+1-555-0123"

    def test_update_unknown_id(self, ledger):
        with pytest.raises(EntityNotFound):
            ledger.update_client("missing", {"company": "X"})

    def test_filters(self, ledger, factory):
        techcorp = factory.client()
        alice = factory.poc(techcorp)
        factory.project(client=techcorp, poc=alice, status="Active")
        factory.project(client=techcorp, poc=alice, code="TECH-003", status="On Hold")
        assert [p.code for p in ledger.list_projects(status="On Hold")] == ["TECH-003"]
        assert len(ledger.list_projects(client=techcorp.id)) == 2


class TestProjectViews:

    def test_detail(self, ledger, factory):
        project = factory.project()
        estimation = factory.estimation(project)
        payment = factory.payment(project)

        detail = ledger.get_project_detail(project.id)
        assert detail["project"].id == project.id
        assert [e.id for e in detail["estimations"]] == [estimation.id]
        assert [p.id for p in detail["payments"]] == [payment.id]

    def test_budget_summary(self, ledger, factory):
        project = factory.project()
        factory.estimation(project, approval_status="Approved")
        factory.estimation(project, version="v2.0")
        factory.payment(project, payout=55000)
        approved = factory.request(project)
        ledger.approve_request(approved.id, "John Admin")
        factory.request(project, requested_amount=5000)

        summary = ledger.get_project_budget_summary(project.id)
        assert summary["project"] == project.id
        assert summary["estimated_total"] == Decimal("105000")
        assert summary["approved_budget"] == Decimal("50000")
        assert summary["exceeded_payments"] == 1
        assert summary["approved_requests_amount"] == Decimal("10000")
        assert summary["pending_requests_amount"] == Decimal("5000")


class TestConcurrency:

    def test_stale_update_is_rejected(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
        first, second = Session(), Session()
        try:
            ledger_a, ledger_b = BudgetLedger(first), BudgetLedger(second)
            client = ledger_a.create_client({"company": "TechCorp Solutions", "client_name": "Michael Johnson"})
            client_id = client.id

            assert ledger_a.get_client(client_id).company == "TechCorp Solutions"
            ledger_b.update_client(client_id, {"company": "Updated by B"})

            with pytest.raises(ConcurrentUpdate):
                ledger_a.update_client(client_id, {"company": "Updated by A"})

            assert ledger_a.get_client(client_id).company == "Updated by B"
        finally:
            first.close()
            second.close()
            engine.dispose()
