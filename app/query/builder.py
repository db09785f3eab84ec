"""
SQL text composition for report queries.

The SELECT and its companion COUNT are built from the same predicate
fragments so pagination totals always describe the rows being paged.
Identifiers are emitted as given; callers validate them against the
catalog before building (see ``QueryService``).
"""

from typing import Any, List, Optional, Sequence

from .schemas import Filter, FilterOperator, SCALAR_OPERATORS

AGGREGATE_MARKERS = ("GROUP BY", "SUM(", "COUNT(", "AVG(")


def render_value(value: Any) -> str:
    """Default textual form of a filter value."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quoted(value: Any) -> str:
    return render_value(value).replace("'", "''")


def build_filter_condition(query_filter: Filter) -> str:
    """
    Compile one filter into a predicate fragment prefixed by `` AND ``.

    Unknown operators and values of the wrong shape compile to an empty
    string so the surrounding statement stays well formed.
    """
    field = query_filter.field
    operator = query_filter.operator
    value = query_filter.value

    if operator in {op.value for op in SCALAR_OPERATORS}:
        if isinstance(value, (list, tuple, dict)):
            return ""
        return f" AND {field} {operator} {render_value(value)}"

    if operator == FilterOperator.LIKE.value:
        if isinstance(value, (list, tuple, dict)):
            return ""
        return f" AND {field} LIKE '%{_quoted(value)}%'"

    if operator == FilterOperator.IN.value:
        if not isinstance(value, (list, tuple)) or not value:
            return ""
        values = ",".join(f"'{_quoted(v)}'" for v in value)
        return f" AND {field} IN ({values})"

    if operator == FilterOperator.BETWEEN.value:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            return ""
        return f" AND {field} BETWEEN {render_value(value[0])} AND {render_value(value[1])}"

    return ""


def build_where_clause(filters: Sequence[Filter]) -> str:
    """``WHERE 1=1`` followed by every compiled predicate, in order."""
    return " WHERE 1=1" + "".join(build_filter_condition(f) for f in filters)


def build_select(
    columns: List[str],
    filters: Sequence[Filter],
    table_name: str,
    page: int,
    page_size: int,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> str:
    """Assemble the paged SELECT statement."""
    query = "SELECT " + (", ".join(columns) if columns else "*")
    query += " FROM " + table_name
    query += build_where_clause(filters)

    if sort_by:
        direction = "DESC" if sort_order == "desc" else "ASC"
        query += f" ORDER BY {sort_by} {direction}"

    if page_size > 0:
        offset = max(page - 1, 0) * page_size
        query += f" LIMIT {page_size} OFFSET {offset}"

    return query


def is_aggregating(sql: str) -> bool:
    """Case-sensitive check for GROUP BY or an aggregate call in the statement."""
    return any(marker in sql for marker in AGGREGATE_MARKERS)


def build_count(sql: str, table_name: str, filters: Sequence[Filter]) -> Optional[str]:
    """Companion COUNT for a SELECT, or None when the SELECT aggregates."""
    if is_aggregating(sql):
        return None
    return "SELECT COUNT(*) FROM " + table_name + build_where_clause(filters)
