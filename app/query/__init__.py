"""
Query module for the report builder.

Main Components:
- builder: filter compiler plus SELECT / companion COUNT composition
- sql_guard: single-SELECT check for literal SQL
- service: QueryService, execution and response shaping
- export: CsvExportWriter
"""

from .builder import build_count, build_filter_condition, build_select, is_aggregating
from .schemas import Filter, FilterOperator, QueryRequest, QueryResponse

__all__ = [
    "build_count",
    "build_filter_condition",
    "build_select",
    "is_aggregating",
    "Filter",
    "FilterOperator",
    "QueryRequest",
    "QueryResponse",
]
