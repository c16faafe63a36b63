from fastapi import APIRouter
from budget_ledger.api import pocs, clients, projects, holds, estimations, payments, milestones, additional_requests

api_router = APIRouter()
# pocs раньше clients: путь /clients/poc/ не должен попасть в /clients/{client_id}/
api_router.include_router(pocs.router, prefix="/api")
api_router.include_router(clients.router, prefix="/api")
api_router.include_router(projects.router, prefix="/api")
api_router.include_router(holds.router, prefix="/api")
api_router.include_router(estimations.router, prefix="/api")
api_router.include_router(payments.router, prefix="/api")
api_router.include_router(milestones.router, prefix="/api")
api_router.include_router(additional_requests.router, prefix="/api")
