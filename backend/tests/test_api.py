"""
HTTP-слой: маршруты, коды ответов, формат ошибок и пагинации.
"""
import pytest


@pytest.fixture
def techcorp(api):
    client = api.post("/api/clients/", json={
        "company": "TechCorp Solutions",
        "client_name": "Michael Johnson",
        "email": "michael@techcorp.com",
    }).json()
    poc = api.post("/api/clients/poc/", json={
        "client": client["id"],
        "name": "Alice Cooper",
        "email": "alice@techcorp.com",
        "phone": "+1-555-0111",
        "designation": "Technical Lead",
    }).json()
    project = api.post("/api/projects/", json={
        "project_name": "E-Commerce Platform",
        "code": "TECH-001",
        "client": client["id"],
        "poc": poc["id"],
        "priority": "High",
        "type": "Fixed Price",
        "start_date": "2024-01-15",
    }).json()
    return {"client": client, "poc": poc, "project": project}


class TestService:

    def test_root(self, api):
        assert api.get("/").json()["version"] == "1.0.0"

    def test_health(self, api):
        assert api.get("/health").json() == {"status": "ok"}


class TestClientsAndPocs:

    def test_create_client(self, api):
        response = api.post("/api/clients/", json={"company": "StartupXYZ", "client_name": "David Chen", "email": ""})
        assert response.status_code == 201
        body = response.json()
        assert body["email"] is None
        assert body["active"] is True
        assert body["id"]

    def test_invalid_email(self, api):
        response = api.post("/api/clients/", json={"company": "X", "client_name": "Y", "email": "not-an-email"})
        assert response.status_code == 422

    def test_poc_list_is_not_shadowed_by_client_detail(self, api, techcorp):
        response = api.get("/api/clients/poc/")
        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert response.json()["results"][0]["client_name"] == "TechCorp Solutions"

    def test_pocs_of_client(self, api, techcorp):
        client_id = techcorp["client"]["id"]
        response = api.get(f"/api/clients/{client_id}/pocs/", params={"active_only": True})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Alice Cooper"]

    def test_client_in_use(self, api, techcorp):
        response = api.delete(f"/api/clients/{techcorp['client']['id']}/")
        assert response.status_code == 409
        assert response.json()["code"] == "REFERENCE_IN_USE"

    def test_unknown_client(self, api):
        response = api.get("/api/clients/missing/")
        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "ENTITY_NOT_FOUND"
        assert body["entity"] == "Client"


class TestProjects:

    def test_names_are_denormalized(self, techcorp):
        project = techcorp["project"]
        assert project["client_name"] == "TechCorp Solutions"
        assert project["poc_name"] == "Alice Cooper"
        assert project["status"] == "Planning"

    def test_inconsistent_poc(self, api, techcorp):
        other = api.post("/api/clients/", json={"company": "Digital Innovations Inc", "client_name": "Sarah Williams"}).json()
        response = api.post("/api/projects/", json={
            "project_name": "Mobile Banking App",
            "code": "DIG-002",
            "client": other["id"],
            "poc": techcorp["poc"]["id"],
            "start_date": "2024-02-01",
        })
        assert response.status_code == 409
        assert response.json()["code"] == "INCONSISTENT_REFERENCE"

    def test_status_filter(self, api, techcorp):
        assert api.get("/api/projects/", params={"status": "Active"}).json()["count"] == 0
        assert api.get("/api/projects/", params={"status": "Planning"}).json()["count"] == 1

    def test_pagination(self, api, techcorp):
        for code in ("TECH-002", "TECH-003"):
            api.post("/api/projects/", json={**techcorp["project"], "code": code})

        page = api.get("/api/projects/", params={"limit": 2}).json()
        assert page["count"] == 3
        assert len(page["results"]) == 2
        assert page["previous"] is None
        assert "offset=2" in page["next"]

        last = api.get("/api/projects/", params={"limit": 2, "offset": 2}).json()
        assert [p["code"] for p in last["results"]] == ["TECH-003"]
        assert last["next"] is None
        assert "offset=0" in last["previous"]

    def test_partial_update(self, api, techcorp):
        project_id = techcorp["project"]["id"]
        response = api.put(f"/api/projects/{project_id}/", json={"status": "Active"})
        assert response.status_code == 200
        assert response.json()["status"] == "Active"
        assert response.json()["code"] == "TECH-001"

    def test_delete(self, api, techcorp):
        project_id = techcorp["project"]["id"]
        assert api.delete(f"/api/projects/{project_id}/").status_code == 204
        assert api.get(f"/api/projects/{project_id}/").status_code == 404


class TestBudgetRecords:

    def test_estimation_total_and_detail(self, api, techcorp):
        project_id = techcorp["project"]["id"]
        response = api.post("/api/estimations/", json={
            "project": project_id,
            "version": "v1.0",
            "date": "2024-01-10",
            "provider": "TechTeam Solutions",
            "development_amount": 80000,
            "testing_amount": 15000,
            "project_management_amount": 10000,
            "total_amount": 1,
        })
        assert response.status_code == 201
        assert response.json()["total_amount"] == 105000

        listing = api.get(f"/api/project/{project_id}/estimation/").json()
        assert listing["count"] == 1

        detail = api.get(f"/api/projects/{project_id}/detail/").json()
        assert detail["project"]["id"] == project_id
        assert len(detail["estimations"]) == 1
        assert detail["payments"] == []

    def test_payment_exceeded_and_rollup(self, api, techcorp):
        project_id = techcorp["project"]["id"]
        payment = api.post("/api/payments/", json={
            "project": project_id,
            "resource": "Frontend Team",
            "approved_budget": 50000,
            "payout": 45000,
        }).json()
        assert payment["is_exceeded"] is False

        api.post("/api/milestones/", json={
            "payment": payment["id"],
            "name": "Frontend Setup Complete",
            "amount": 15000,
            "due_date": "2024-02-15",
            "status": "Completed",
            "completion_date": "2024-02-10",
        })
        updated = api.put(f"/api/payments/{payment['id']}/", json={"payout": 55000}).json()
        assert updated["is_exceeded"] is True
        assert updated["completed_milestone_value"] == 15000

        listing = api.get(f"/api/project/{project_id}/payments/").json()
        assert listing["results"][0]["total_milestone_value"] == 15000

    def test_negative_amount(self, api, techcorp):
        response = api.post("/api/payments/", json={
            "project": techcorp["project"]["id"],
            "resource": "QA Team",
            "approved_budget": -1,
            "payout": 0,
        })
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_AMOUNT"
        assert response.json()["field"] == "approved_budget"

    def test_sub_cent_amount(self, api, techcorp):
        response = api.post("/api/payments/", json={
            "project": techcorp["project"]["id"],
            "resource": "QA Team",
            "approved_budget": 50000,
            "payout": 50000.004,
        })
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_AMOUNT"
        assert response.json()["field"] == "payout"

    def test_milestone_filter(self, api, techcorp):
        response = api.get("/api/milestones/", params={"payment": "missing"})
        assert response.status_code == 200
        assert response.json()["results"] == []


class TestAdditionalRequests:

    def test_approve_then_reject(self, api, techcorp):
        request = api.post("/api/additional-requests/", json={
            "project": techcorp["project"]["id"],
            "requested_amount": 10000,
            "reason": "Additional payment gateway integration required",
        }).json()
        assert request["status"] == "Pending"

        approved = api.post(f"/api/additional-requests/{request['id']}/approve/", json={"approved_by": "Jane"})
        assert approved.status_code == 200
        assert approved.json()["approved_by"] == "Jane"

        rejected = api.post(f"/api/additional-requests/{request['id']}/reject/", json={"rejection_reason": "Too late"})
        assert rejected.status_code == 409
        assert rejected.json()["code"] == "INVALID_TRANSITION"
        assert rejected.json()["status"] == "Approved"

    def test_blank_approver(self, api, techcorp):
        request = api.post("/api/additional-requests/", json={
            "project": techcorp["project"]["id"],
            "requested_amount": 5000,
            "reason": "Enhanced security features implementation",
        }).json()
        response = api.post(f"/api/additional-requests/{request['id']}/approve/", json={"approved_by": " "})
        assert response.status_code == 400

    def test_status_filter(self, api, techcorp):
        api.post("/api/additional-requests/", json={
            "project": techcorp["project"]["id"],
            "requested_amount": 5000,
            "reason": "Enhanced security features implementation",
        })
        assert api.get("/api/additional-requests/", params={"status": "Pending"}).json()["count"] == 1
        assert api.get("/api/additional-requests/", params={"status": "Approved"}).json()["count"] == 0


class TestHoldsAndSummary:

    def test_hold_lifecycle(self, api, techcorp):
        project_id = techcorp["project"]["id"]
        hold = api.post(f"/api/projects/{project_id}/add-hold/", json={"reason": "Awaiting PO", "amount": 2000})
        assert hold.status_code == 201

        summary = api.get(f"/api/projects/{project_id}/budget-summary/").json()
        assert summary["active_holds_amount"] == 2000

        hold_id = hold.json()["id"]
        assert api.post(f"/api/holds/{hold_id}/release/").json()["is_active"] is False
        assert api.post(f"/api/holds/{hold_id}/release/").status_code == 409
        assert api.get(f"/api/projects/{project_id}/holds/").json()[0]["released_at"] is not None
