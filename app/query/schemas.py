"""
Query request and response schemas.

Wire names are camelCase (``tableName``, ``pageSize``...) to match the UI;
Python attributes stay snake_case.
"""

from typing import Any, Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class FilterOperator(str, Enum):
    """Operators understood by the filter compiler."""

    EQ = "="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    NE = "!="
    LIKE = "LIKE"
    IN = "IN"
    BETWEEN = "BETWEEN"


SCALAR_OPERATORS = {
    FilterOperator.EQ,
    FilterOperator.GT,
    FilterOperator.LT,
    FilterOperator.GTE,
    FilterOperator.LTE,
    FilterOperator.NE,
}


class Filter(BaseModel):
    """A single predicate on one column.

    ``operator`` is kept as a plain string: unknown operators are accepted
    and dropped at compile time rather than rejected.
    """

    field: str
    operator: str
    value: Any = None
    type: Optional[str] = None  # text, number, date, enum

    model_config = ConfigDict(from_attributes=True)


class QueryRequest(BaseModel):
    """Structured query composed by the UI."""

    table_name: Optional[str] = None
    columns: List[str] = []
    filters: List[Filter] = []
    sql: Optional[str] = None
    page: int = 1
    page_size: int = 50
    sort_by: Optional[str] = None
    sort_order: Optional[str] = "asc"
    search: Optional[str] = None  # reserved

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("columns", "filters", mode="before")
    @classmethod
    def null_means_empty(cls, v):
        return [] if v is None else v


class QueryResponse(BaseModel):
    """One page of results plus pagination totals."""

    data: List[Dict[str, Any]] = []
    total: int = 0
    page: int = 1
    page_size: int = 50
    total_pages: int = 1

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
