from typing import Any, Callable, Dict, Optional

from msfeedback.utils.errors import BadRequestError
from msfeedback.utils.http import parse_iso_datetime

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def like_contains(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally inside ``%...%``."""
    term = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{term}%"


def contains(column, value: str):
    """Case-insensitive substring filter on ``column``."""
    return column.ilike(like_contains(value), escape="\\")


def apply_sort(query, model, sort_by: Optional[str], sort_order: Optional[str],
               allowed: Dict[str, Any], default: str):
    """Order by a whitelisted field, always ending with ``id`` so pages are stable."""
    key = sort_by or default
    if key not in allowed:
        raise BadRequestError(f"Cannot sort by '{key}'", errors=[
            {"field": "sortBy", "message": f"Must be one of: {', '.join(sorted(allowed))}"}
        ])
    order = (sort_order or "desc").lower()
    if order not in ("asc", "desc"):
        raise BadRequestError("sortOrder must be 'asc' or 'desc'", errors=[
            {"field": "sortOrder", "message": "Must be one of: asc, desc"}
        ])
    column = allowed[key]
    if order == "asc":
        return query.order_by(column.asc(), model.id.asc())
    return query.order_by(column.desc(), model.id.desc())


def apply_date_range(query, column, created_from: Optional[str], created_to: Optional[str]):
    if created_from:
        start = parse_iso_datetime(created_from)
        if start is None:
            raise BadRequestError("Invalid createdFrom date", errors=[
                {"field": "createdFrom", "message": "Not a valid ISO 8601 datetime."}
            ])
        query = query.filter(column >= start)
    if created_to:
        end = parse_iso_datetime(created_to)
        if end is None:
            raise BadRequestError("Invalid createdTo date", errors=[
                {"field": "createdTo", "message": "Not a valid ISO 8601 datetime."}
            ])
        query = query.filter(column <= end)
    return query


def paginate(query, page: int, limit: int, serialize: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return {
        "items": [serialize(item) for item in pagination.items],
        "pagination": {
            "current": page,
            "pageSize": limit,
            "total": pagination.total,
            "pages": pagination.pages,
        },
    }
