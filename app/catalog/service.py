"""Service layer for schema introspection."""

import logging
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.catalog.dao import CatalogDAO
from app.catalog.schemas import ColumnInfo, TableInfo

logger = logging.getLogger(__name__)


class CatalogService:
    """Best-effort introspection: catalog failures surface as empty lists."""

    def __init__(self, catalog_dao: CatalogDAO):
        self.dao = catalog_dao

    def list_tables(self) -> List[TableInfo]:
        """Get every table in the default schema with its ordered columns."""
        try:
            return [
                TableInfo(name=name, columns=self.dao.get_columns(name))
                for name in self.dao.get_table_names()
            ]
        except SQLAlchemyError as e:
            self.dao.db.rollback()
            logger.warning(f"Failed to read table catalog: {e}")
            return []

    def list_columns(self, table_name: str) -> List[ColumnInfo]:
        """Get the columns of one table."""
        if not table_name or not table_name.strip():
            raise HTTPException(status_code=400, detail="Table name is required")

        try:
            return self.dao.get_columns(table_name)
        except SQLAlchemyError as e:
            self.dao.db.rollback()
            logger.warning(f"Failed to read columns for table '{table_name}': {e}")
            return []

    def describe_table(self, table_name: str) -> Optional[TableInfo]:
        """Get one table with its columns, or None when the catalog does not list it."""
        try:
            if table_name not in self.dao.get_table_names():
                return None
            return TableInfo(name=table_name, columns=self.dao.get_columns(table_name))
        except SQLAlchemyError as e:
            self.dao.db.rollback()
            logger.warning(f"Failed to describe table '{table_name}': {e}")
            return None

    def first_table_name(self) -> Optional[str]:
        """Default table for requests that do not name one."""
        try:
            return self.dao.get_first_table_name()
        except SQLAlchemyError as e:
            self.dao.db.rollback()
            logger.warning(f"Failed to resolve default table: {e}")
            return None
