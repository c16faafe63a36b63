"""
Подключение к БД и сессии SQLAlchemy.
"""
import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from budget_ledger.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str, **kwargs):
    """Создать engine; для SQLite разрешаем доступ из разных потоков"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Сессия БД на время запроса (зависимость FastAPI)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Создать все таблицы, если их нет"""
    import budget_ledger.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured for %s", engine.url.render_as_string(hide_password=True))
