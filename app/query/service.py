# app/query/service.py
"""Query execution service: builds, validates and runs report queries."""

import math
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import DEFAULT_PAGE_SIZE, EXPORT_PAGE_SIZE, QUERY_TIMEOUT_MS, VALIDATE_IDENTIFIERS
from app.catalog.service import CatalogService
from app.query.builder import build_count, build_select
from app.query.schemas import QueryRequest, QueryResponse
from app.query.sql_guard import SQLGuardError, ensure_single_select

logger = logging.getLogger(__name__)


def normalize_request(request: QueryRequest) -> QueryRequest:
    """Apply paging and sort defaults."""
    return request.model_copy(
        update={
            "page": max(1, request.page),
            "page_size": request.page_size if request.page_size > 0 else DEFAULT_PAGE_SIZE,
            "sort_order": request.sort_order or "asc",
        }
    )


def total_pages(total: int, page_size: int) -> int:
    if page_size > 0 and total > 0:
        return math.ceil(total / page_size)
    return 1


def _normalize_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


def _db_message(error: SQLAlchemyError) -> str:
    return str(getattr(error, "orig", None) or error)


# Statements carry literal values; "%" must reach the server untouched.
RAW_SQL_OPTIONS = {"no_parameters": True}


class QueryService:
    """Runs composed or literal SELECTs against the reporting database."""

    def __init__(
        self,
        db: Session,
        catalog_service: CatalogService,
        validate_identifiers: bool = VALIDATE_IDENTIFIERS,
        timeout_ms: int = QUERY_TIMEOUT_MS,
    ):
        self.db = db
        self.catalog = catalog_service
        self.validate_identifiers = validate_identifiers
        self.timeout_ms = timeout_ms

    # ===== PUBLIC OPERATIONS =====

    def execute(self, request: QueryRequest) -> QueryResponse:
        """Run one page of a query and report pagination totals."""
        request = normalize_request(request)
        table_name = self._resolve_table(request)
        select_sql, count_sql = self._prepare(request, table_name, request.page, request.page_size, request.sort_by)

        with self._read_only():
            _, rows = self._run_select(select_sql)
            total = self._run_count(count_sql) if count_sql else 0

        return QueryResponse(
            data=rows,
            total=total,
            page=request.page,
            page_size=request.page_size,
            total_pages=total_pages(total, request.page_size),
        )

    def fetch_for_export(self, request: QueryRequest) -> Tuple[List[str], List[Dict[str, Any]]]:
        """Run the export variant of a query: first page of EXPORT_PAGE_SIZE rows, unsorted."""
        table_name = self._resolve_table(request)
        select_sql, _ = self._prepare(request, table_name, 1, EXPORT_PAGE_SIZE, None)

        with self._read_only():
            return self._run_select(select_sql)

    # ===== PREPARATION =====

    def _resolve_table(self, request: QueryRequest) -> Optional[str]:
        if request.table_name:
            return request.table_name
        return self.catalog.first_table_name()

    def _prepare(
        self,
        request: QueryRequest,
        table_name: Optional[str],
        page: int,
        page_size: int,
        sort_by: Optional[str],
    ) -> Tuple[str, Optional[str]]:
        """Return the SELECT to run and its companion COUNT (None when elided)."""
        if request.sql:
            try:
                select_sql = ensure_single_select(request.sql)
            except SQLGuardError as e:
                raise HTTPException(status_code=400, detail=str(e))

            if not table_name:
                return select_sql, None
            count_sql = build_count(select_sql, table_name, request.filters)
            if count_sql:
                self._check_identifiers(table_name, [], [f.field for f in request.filters], None)
            return select_sql, count_sql

        if not table_name:
            raise HTTPException(status_code=400, detail="Table name is required and no default table is available")

        self._check_identifiers(table_name, request.columns, [f.field for f in request.filters], sort_by)
        select_sql = build_select(
            request.columns, request.filters, table_name, page, page_size, sort_by, request.sort_order
        )
        return select_sql, build_count(select_sql, table_name, request.filters)

    def _check_identifiers(
        self, table_name: str, columns: List[str], fields: List[str], sort_by: Optional[str]
    ) -> None:
        """Reject identifiers that are not in the catalog before they reach SQL text."""
        if not self.validate_identifiers:
            return

        table = self.catalog.describe_table(table_name)
        if table is None:
            raise HTTPException(status_code=400, detail=f"Unknown table: {table_name}")

        known = {c.name for c in table.columns}
        for column in columns:
            if column != "*" and column not in known:
                raise HTTPException(status_code=400, detail=f"Unknown column: {column}")
        for field in fields:
            if field not in known:
                raise HTTPException(status_code=400, detail=f"Unknown filter field: {field}")
        if sort_by and sort_by not in known:
            raise HTTPException(status_code=400, detail=f"Unknown sort column: {sort_by}")

    # ===== EXECUTION =====

    @contextmanager
    def _read_only(self):
        """Scope statements to one transaction; read-only with a timeout on PostgreSQL."""
        # Catalog lookups may already have opened a transaction on this session.
        self.db.rollback()
        try:
            if self.db.get_bind().dialect.name == "postgresql":
                conn = self.db.connection()
                conn.exec_driver_sql("SET TRANSACTION READ ONLY")
                conn.exec_driver_sql(f"SET LOCAL statement_timeout = {int(self.timeout_ms)}")
            yield
        finally:
            self.db.rollback()

    def _run_select(self, select_sql: str) -> Tuple[List[str], List[Dict[str, Any]]]:
        logger.debug(f"Executing report query: {select_sql}")
        try:
            result = self.db.connection().exec_driver_sql(select_sql, execution_options=RAW_SQL_OPTIONS)
            keys = list(result.keys())
            rows = [{key: _normalize_value(value) for key, value in zip(keys, row)} for row in result]
        except SQLAlchemyError as e:
            logger.info(f"Report query failed: {_db_message(e)}")
            raise HTTPException(status_code=400, detail=_db_message(e))
        return keys, rows

    def _run_count(self, count_sql: str) -> int:
        try:
            result = self.db.connection().exec_driver_sql(count_sql, execution_options=RAW_SQL_OPTIONS)
            return int(result.scalar() or 0)
        except SQLAlchemyError as e:
            logger.warning(f"Count query failed, reporting total=0: {_db_message(e)}")
            return 0
