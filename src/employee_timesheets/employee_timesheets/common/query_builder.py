"""Read-query construction from untrusted list parameters.

Search terms and pagination values are always bound as parameters. Sort
columns cannot be bound, so they are resolved through a closed allow-list and
only the allow-listed SQL expression is ever placed into the statement text.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core.enums import SortOrder

LIKE_ESCAPE = "!"


@dataclass(frozen=True)
class ListQuery:
    search: str = ""
    sort: str = ""
    order: SortOrder = SortOrder.ASC
    page: int = 1

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        *,
        allowed_sorts: Mapping[str, str],
        default_sort: str,
    ) -> "ListQuery":
        return cls(
            search=(args.get("search") or "").strip(),
            sort=resolve_sort_key(args.get("sort"), allowed_sorts, default_sort),
            order=SortOrder.parse(args.get("order")),
            page=parse_page(args.get("page")),
        )


def resolve_sort_key(requested: Optional[str], allowed: Mapping[str, str], default: str) -> str:
    if requested and requested in allowed:
        return requested
    return default


def parse_page(value: Any) -> int:
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def page_offset(page: int, page_size: int) -> int:
    return (max(page, 1) - 1) * page_size


def page_count(total: int, page_size: int) -> int:
    return int(math.ceil(total / page_size)) if total > 0 else 0


def like_pattern(term: str) -> str:
    # Case folding is left to SQL so both sides of LIKE fold the same way.
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _where_search(search_column: str) -> str:
    return f"WHERE LOWER({search_column}) LIKE LOWER(:search) ESCAPE '{LIKE_ESCAPE}'"


def build_select(
    *,
    select_from: str,
    search_column: str,
    sort_columns: Mapping[str, str],
    tiebreak_column: str,
    query: ListQuery,
    page_size: Optional[int] = None,
) -> Tuple[str, Dict[str, Any]]:
    """Build a filtered, sorted (and optionally paginated) SELECT.

    ``select_from`` is the trusted ``SELECT ... FROM ... [JOIN ...]`` prefix.
    ``query.sort`` is looked up again here so a ListQuery built by hand cannot
    smuggle an arbitrary column into ORDER BY.
    """
    if query.sort not in sort_columns:
        raise ValueError(f"Unknown sort key: {query.sort!r}")
    order = SortOrder(query.order)
    sql = (
        f"{select_from} {_where_search(search_column)} "
        f"ORDER BY {sort_columns[query.sort]} {order.value}, {tiebreak_column} ASC"
    )
    params: Dict[str, Any] = {"search": like_pattern(query.search)}
    if page_size is not None:
        sql += " LIMIT :limit OFFSET :offset"
        params["limit"] = int(page_size)
        params["offset"] = page_offset(query.page, page_size)
    return sql, params


def build_count(*, count_from: str, search_column: str, query: ListQuery) -> Tuple[str, Dict[str, Any]]:
    sql = f"SELECT COUNT(*) AS count FROM {count_from} {_where_search(search_column)}"
    return sql, {"search": like_pattern(query.search)}
