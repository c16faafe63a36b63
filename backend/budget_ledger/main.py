import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from budget_ledger.core.config import settings
from budget_ledger.core.database import init_db
from budget_ledger.core.exceptions import (
    ConcurrentUpdate,
    InconsistentReference,
    InvalidTransition,
    LedgerError,
    NotFound,
    ValidationError,
)
from budget_ledger.api import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Создаем таблицы
init_db()

app = FastAPI(
    title="Project Budget Ledger API",
    description="API для учёта клиентов, проектов, оценок, платежей и запросов на дополнительный бюджет",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Порядок важен: подклассы проверяются раньше базовых классов
ERROR_STATUS_CODES = (
    (ValidationError, 400),
    (NotFound, 404),
    (InconsistentReference, 409),
    (InvalidTransition, 409),
    (ConcurrentUpdate, 409),
)


def status_code_for(exc: LedgerError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("Unhandled ledger error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


app.include_router(api_router)


@app.get("/")
def root():
    return {"message": "Project Budget Ledger API", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"status": "ok"}
