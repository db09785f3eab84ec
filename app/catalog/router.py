"""API router for the catalog module."""

from typing import List
from fastapi import APIRouter, Depends

from app.core.config import CATALOG_SCHEMA
from app.core.dependencies import ReportingSessionDep
from app.catalog.dao import CatalogDAO
from app.catalog.schemas import ColumnInfo, TableInfo
from app.catalog.service import CatalogService

router = APIRouter(prefix="/tables", tags=["catalog"])


# ===== DEPENDENCY INJECTION =====

def get_catalog_dao(db: ReportingSessionDep) -> CatalogDAO:
    """Get CatalogDAO instance."""
    return CatalogDAO(db, CATALOG_SCHEMA)


def get_catalog_service(dao: CatalogDAO = Depends(get_catalog_dao)) -> CatalogService:
    """Get CatalogService instance."""
    return CatalogService(dao)


# ===== CATALOG ENDPOINTS =====

@router.get("", response_model=List[TableInfo])
def get_tables(service: CatalogService = Depends(get_catalog_service)) -> List[TableInfo]:
    """Get all tables in the default schema with their columns."""
    return service.list_tables()


@router.get("/{table}/columns", response_model=List[ColumnInfo])
def get_table_columns(table: str, service: CatalogService = Depends(get_catalog_service)) -> List[ColumnInfo]:
    """Get the columns of a table."""
    return service.list_columns(table)
