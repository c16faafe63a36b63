from typing import Sequence

from fastapi import Query, Request

from budget_ledger.core.config import settings


class PageParams:
    """Параметры limit/offset для списков"""

    def __init__(
        self,
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        offset: int = Query(0, ge=0),
    ):
        self.limit = limit
        self.offset = offset


def paginate(request: Request, items: Sequence, page: PageParams) -> dict:
    """Ответ в формате {results, count, next, previous}"""
    count = len(items)
    results = items[page.offset:page.offset + page.limit]

    next_url = None
    if page.offset + page.limit < count:
        next_url = str(request.url.include_query_params(limit=page.limit, offset=page.offset + page.limit))

    previous_url = None
    if page.offset > 0:
        previous_url = str(request.url.include_query_params(limit=page.limit, offset=max(page.offset - page.limit, 0)))

    return {"results": results, "count": count, "next": next_url, "previous": previous_url}
