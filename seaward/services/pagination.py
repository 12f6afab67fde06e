"""Sorting and paging for list actions."""
from math import ceil
import re
from typing import Any, Dict, Optional

from sqlmodel import Session, select, func

DEFAULT_LIMIT = 10


def to_column_name(field: str) -> str:
    """Accept camelCase sort keys (createdAt) as well as column names."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", field).lower()


def apply_sort(statement, model, sort: Optional[str]):
    """
    Order a statement by `field` or `-field` (descending).

    Raises:
        ValueError: If the model has no such column
    """
    if not sort:
        return statement
    descending = sort.startswith("-")
    column = getattr(model, to_column_name(sort.lstrip("-")), None)
    if column is None:
        raise ValueError(f"Cannot sort {model.__name__} by '{sort}'")
    return statement.order_by(column.desc() if descending else column.asc())


def paginate(
    session: Session,
    statement,
    model,
    sort: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
    page: int = 1,
) -> Dict[str, Any]:
    """
    Run a select and wrap the rows in a page envelope.

    Args:
        session: Database session
        statement: Filtered select over `model`
        model: Entity class used to resolve the sort column
        sort: Sort key, prefix with '-' for descending
        limit: Page size, 0 returns everything
        page: 1-based page number

    Returns:
        Dict with docs, total_docs, limit, page, total_pages, has_next_page, has_prev_page
    """
    page = max(page, 1)
    total_docs = session.exec(select(func.count()).select_from(statement.subquery())).one()

    statement = apply_sort(statement, model, sort)
    if limit and limit > 0:
        statement = statement.offset((page - 1) * limit).limit(limit)
        total_pages = max(ceil(total_docs / limit), 1)
    else:
        total_pages = 1

    docs = list(session.exec(statement).all())
    return {
        "docs": docs,
        "total_docs": total_docs,
        "limit": limit,
        "page": page,
        "total_pages": total_pages,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }
