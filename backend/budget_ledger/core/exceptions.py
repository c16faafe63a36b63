"""
Типизированные ошибки бюджетного реестра.

Каждая ошибка прерывает только текущую операцию. Транспортный слой
(FastAPI) сопоставляет классы с HTTP-статусами в main.py.

    LedgerError
    +-- ValidationError
    |   +-- InvalidAmount
    +-- NotFound
    |   +-- EntityNotFound
    +-- InconsistentReference
    |   +-- ReferenceInUse
    +-- InvalidTransition
    +-- ConcurrentUpdate
"""
from typing import Any


class LedgerError(Exception):
    """Базовая ошибка реестра"""

    code: str = "LEDGER_ERROR"

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, **self.details}


class ValidationError(LedgerError):
    """Отсутствует или некорректно обязательное поле"""

    code: str = "VALIDATION_ERROR"


class InvalidAmount(ValidationError):
    """Отрицательная (или вне диапазона) сумма"""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: Any, reason: str = "must not be negative"):
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason} (got {value})", field=field)


class NotFound(LedgerError):
    """Ссылка на несуществующую запись"""

    code: str = "NOT_FOUND"


class EntityNotFound(NotFound):
    code: str = "ENTITY_NOT_FOUND"

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}", entity=entity, id=entity_id)


class InconsistentReference(LedgerError):
    """Внешние ключи указывают на несовместимые записи"""

    code: str = "INCONSISTENT_REFERENCE"


class ReferenceInUse(InconsistentReference):
    """Запись нельзя удалить: на неё ссылаются зависимые записи"""

    code: str = "REFERENCE_IN_USE"

    def __init__(self, entity: str, entity_id: str, dependents: str):
        super().__init__(
            f"{entity} {entity_id} is referenced by existing {dependents}",
            entity=entity,
            id=entity_id,
            dependents=dependents,
        )


class InvalidTransition(LedgerError):
    """Нарушение правил жизненного цикла (workflow)"""

    code: str = "INVALID_TRANSITION"

    def __init__(self, entity: str, entity_id: str, current: str, action: str):
        self.current = current
        super().__init__(
            f"Cannot {action} {entity} {entity_id} in status {current}",
            entity=entity,
            id=entity_id,
            status=current,
        )


class ConcurrentUpdate(LedgerError):
    """Запись изменена другим запросом (оптимистическая блокировка)"""

    code: str = "CONCURRENT_UPDATE"
