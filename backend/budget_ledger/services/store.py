"""
Хранилище сущностей поверх сессии SQLAlchemy.

Хранилище не управляет транзакцией: commit/rollback делает фасад
(BudgetLedger), здесь только flush.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from budget_ledger.core.clock import utcnow
from budget_ledger.core.exceptions import EntityNotFound

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Поля, которые назначает только хранилище
SYSTEM_FIELDS = frozenset({"seq", "id", "row_version", "created_at", "updated_at"})


def new_entity_id() -> str:
    return str(uuid.uuid4())


class EntityStore:
    """CRUD по id для любой модели реестра"""

    def __init__(self, db: Session):
        self.db = db

    def find(self, model: Type[ModelT], entity_id: str) -> Optional[ModelT]:
        if not entity_id:
            return None
        return self.db.query(model).filter(model.id == entity_id).first()

    def get(self, model: Type[ModelT], entity_id: str) -> ModelT:
        entity = self.find(model, entity_id)
        if entity is None:
            raise EntityNotFound(model.__name__, entity_id)
        return entity

    def list(self, model: Type[ModelT], **filters: Any) -> List[ModelT]:
        """Фильтр по равенству полей, в порядке вставки"""
        query = self.db.query(model)
        for field, value in filters.items():
            query = query.filter(getattr(model, field) == value)
        return query.order_by(model.seq).all()

    def count(self, model: Type[ModelT], **filters: Any) -> int:
        query = self.db.query(model)
        for field, value in filters.items():
            query = query.filter(getattr(model, field) == value)
        return query.count()

    def insert(self, model: Type[ModelT], values: Dict[str, Any]) -> ModelT:
        now = utcnow()
        data = {k: v for k, v in values.items() if k not in SYSTEM_FIELDS}
        entity = model(**data, id=new_entity_id(), created_at=now, updated_at=now)
        self.db.add(entity)
        self.db.flush()
        logger.debug("Inserted %s %s", model.__name__, entity.id)
        return entity

    def update(self, entity: ModelT, values: Dict[str, Any]) -> ModelT:
        """Частичное обновление: меняются только переданные поля"""
        for field, value in values.items():
            if field in SYSTEM_FIELDS:
                continue
            setattr(entity, field, value)
        entity.updated_at = utcnow()
        self.db.flush()
        return entity

    def update_by_id(self, model: Type[ModelT], entity_id: str, values: Dict[str, Any]) -> ModelT:
        return self.update(self.get(model, entity_id), values)

    def delete(self, model: Type[ModelT], entity_id: str) -> None:
        entity = self.get(model, entity_id)
        self.db.delete(entity)
        self.db.flush()
        logger.debug("Deleted %s %s", model.__name__, entity_id)
