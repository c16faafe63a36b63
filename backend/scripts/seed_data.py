"""
Скрипт для заполнения БД демонстрационными данными
"""
import sys
import os
from datetime import date
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from budget_ledger.core.database import SessionLocal, init_db
from budget_ledger.core.exceptions import LedgerError
from budget_ledger.models import Client
from budget_ledger.services.ledger import BudgetLedger

CLIENTS = [
    {
        "company": "TechCorp Solutions",
        "client_name": "Michael Johnson",
        "email": "michael@techcorp.com",
        "phone": "+1-555-0123",
        "address": "123 Tech Street, Silicon Valley, CA",
        "pocs": [
            {"name": "Alice Cooper", "email": "alice@techcorp.com", "phone": "+1-555-0111", "designation": "Technical Lead"},
            {"name": "Bob Martinez", "email": "bob@techcorp.com", "phone": "+1-555-0222", "designation": "Project Manager"},
        ],
    },
    {
        "company": "Digital Innovations Inc",
        "client_name": "Sarah Williams",
        "email": "sarah@digitalinnovations.com",
        "phone": "+1-555-0456",
        "address": "456 Innovation Ave, New York, NY",
        "pocs": [
            {"name": "Carol Davis", "email": "carol@digitalinnovations.com", "phone": "+1-555-0333", "designation": "Product Owner"},
        ],
    },
    {
        "company": "StartupXYZ",
        "client_name": "David Chen",
        "email": "david@startupxyz.com",
        "phone": "+1-555-0789",
        "address": "789 Startup Blvd, Austin, TX",
        "active": False,
        "pocs": [],
    },
]


def seed_project(ledger: BudgetLedger, client, poc):
    """Проект E-Commerce Platform с оценкой, платежом, вехами и запросами"""
    project = ledger.create_project({
        "project_name": "E-Commerce Platform",
        "code": "TECH-001",
        "client": client.id,
        "poc": poc.id,
        "priority": "High",
        "type": "Fixed Price",
        "status": "Active",
        "start_date": date(2024, 1, 15),
        "end_date": date(2024, 6, 15),
        "description": "Modern e-commerce platform with React and Node.js",
    })
    ledger.create_estimation({
        "project": project.id,
        "version": "v1.0",
        "date": date(2024, 1, 10),
        "provider": "TechTeam Solutions",
        "development_amount": 80000,
        "testing_amount": 15000,
        "project_management_amount": 10000,
        "approval_status": "Approved",
        "po_status": "Received",
        "notes": "Initial estimation for e-commerce platform",
    })
    payment = ledger.create_payment({
        "project": project.id,
        "payment_type": "Development",
        "resource": "Frontend Team",
        "approved_budget": 50000,
        "additional_amount": 5000,
        "payout": 45000,
        "retention": 5000,
        "utilization_percentage": 90,
    })
    ledger.create_milestone({
        "payment": payment.id,
        "name": "Frontend Setup Complete",
        "amount": 15000,
        "due_date": date(2024, 2, 15),
        "status": "Completed",
        "completion_date": date(2024, 2, 10),
    })
    ledger.create_milestone({
        "payment": payment.id,
        "name": "User Authentication Module",
        "amount": 20000,
        "due_date": date(2024, 3, 1),
        "status": "In Progress",
    })
    approved = ledger.create_request({
        "project": project.id,
        "requested_amount": 10000,
        "reason": "Additional payment gateway integration required",
    })
    ledger.approve_request(approved.id, "John Admin")
    ledger.create_request({
        "project": project.id,
        "requested_amount": 5000,
        "reason": "Enhanced security features implementation",
    })
    return project


def seed_data():
    init_db()
    db = SessionLocal()
    ledger = BudgetLedger(db)

    try:
        created = {}
        for client_data in CLIENTS:
            data = dict(client_data)
            pocs = data.pop("pocs")
            existing = ledger.store.list(Client, company=data["company"])
            if existing:
                print(f"Client {data['company']} already exists, skipping")
                continue
            client = ledger.create_client(data)
            created[client.company] = (client, [ledger.create_poc({**poc, "client": client.id}) for poc in pocs])

        if "TechCorp Solutions" in created:
            client, pocs = created["TechCorp Solutions"]
            seed_project(ledger, client, pocs[0])

        print("✅ Seed data created successfully!")

    except LedgerError as e:
        print(f"❌ Error: {e.message}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
