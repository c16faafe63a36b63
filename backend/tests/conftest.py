"""
Общие фикстуры: in-memory SQLite, сессия, фасад реестра и HTTP-клиент.
"""
import os

# До импорта приложения: модульный engine не должен создавать файл БД
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import budget_ledger.models  # noqa: F401
from budget_ledger.core.database import Base, build_engine, get_db
from budget_ledger.services.ledger import BudgetLedger


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def ledger(db):
    return BudgetLedger(db)


@pytest.fixture
def api(session_factory):
    """TestClient, у которого get_db отдаёт сессии тестовой БД"""
    from budget_ledger.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class LedgerFactory:
    """Создание валидных записей с минимумом обязательных полей"""

    def __init__(self, ledger: BudgetLedger):
        self.ledger = ledger

    def client(self, **overrides):
        data = {
            "company": "TechCorp Solutions",
            "client_name": "Michael Johnson",
            "email": "michael@techcorp.com",
        }
        data.update(overrides)
        return self.ledger.create_client(data)

    def poc(self, client, **overrides):
        data = {
            "client": client.id,
            "name": "Alice Cooper",
            "email": "alice@techcorp.com",
            "phone": "+1-555-0111",
            "designation": "Technical Lead",
        }
        data.update(overrides)
        return self.ledger.create_poc(data)

    def project(self, client=None, poc=None, **overrides):
        if client is None:
            client = self.client()
        if poc is None:
            poc = self.poc(client)
        data = {
            "project_name": "E-Commerce Platform",
            "code": "TECH-001",
            "client": client.id,
            "poc": poc.id,
            "start_date": date(2024, 1, 15),
        }
        data.update(overrides)
        return self.ledger.create_project(data)

    def estimation(self, project, **overrides):
        data = {
            "project": project.id,
            "version": "v1.0",
            "date": date(2024, 1, 10),
            "provider": "TechTeam Solutions",
            "development_amount": 80000,
            "testing_amount": 15000,
            "project_management_amount": 10000,
        }
        data.update(overrides)
        return self.ledger.create_estimation(data)

    def payment(self, project, **overrides):
        data = {
            "project": project.id,
            "resource": "Frontend Team",
            "approved_budget": 50000,
            "payout": 45000,
        }
        data.update(overrides)
        return self.ledger.create_payment(data)

    def milestone(self, payment, **overrides):
        data = {
            "payment": payment.id,
            "name": "Frontend Setup Complete",
            "amount": 15000,
            "due_date": date(2024, 2, 15),
        }
        data.update(overrides)
        return self.ledger.create_milestone(data)

    def request(self, project, **overrides):
        data = {
            "project": project.id,
            "requested_amount": 10000,
            "reason": "Additional payment gateway integration required",
        }
        data.update(overrides)
        return self.ledger.create_request(data)


@pytest.fixture
def factory(ledger):
    return LedgerFactory(ledger)
