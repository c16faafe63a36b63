from decimal import Decimal
from typing import Annotated, ClassVar, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, PlainSerializer, model_validator

T = TypeVar("T")

# Суммы в Python остаются Decimal, в JSON отдаются числом
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def blank_to_none(v):
    """Пустые строки из форм считаем отсутствующим значением"""
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


class PartialUpdate(BaseModel):
    """
    База для схем частичного обновления.

    Непереданные поля не меняются; явный null для полей из non_nullable
    отклоняется.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    class Config:
        use_enum_values = True

    @model_validator(mode="after")
    def check_non_nullable(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class PaginatedResponse(BaseModel, Generic[T]):
    results: List[T]
    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
