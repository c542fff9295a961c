import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from fastapi import Query
from fiverivers.core.config import settings


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


@dataclass
class PageParams:
    page: int = 1
    page_size: int = 20

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def page_params(
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Rows per page"),
) -> PageParams:
    """
    FastAPI dependency reading ``page``/``pageSize`` query parameters.

    Missing, non-numeric and non-positive values fall back to page 1 and the
    configured default page size instead of failing the request.
    """
    return PageParams(
        page=_positive_int(page, 1),
        page_size=_positive_int(page_size, settings.DEFAULT_PAGE_SIZE),
    )


def build_page(items: List[Any], total: int, params: PageParams) -> Dict[str, Any]:
    """Wrap one page of results in the list envelope returned by every list endpoint."""
    return {
        "data": items,
        "total": total,
        "page": params.page,
        "page_size": params.page_size,
        "total_pages": math.ceil(total / params.page_size) if params.page_size else 0,
    }
