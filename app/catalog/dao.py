"""Data Access Objects for the catalog module (reporting database)."""

from sqlalchemy.orm import Session
from sqlalchemy import text
from typing import List, Optional

from app.catalog.schemas import ColumnInfo


TABLE_NAMES_SQL = text(
    """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = :schema
    ORDER BY table_name
    """
)

COLUMNS_SQL = text(
    """
    SELECT
        column_name AS name,
        data_type AS type,
        is_nullable = 'YES' AS nullable
    FROM information_schema.columns
    WHERE table_name = :table_name AND table_schema = :schema
    ORDER BY ordinal_position
    """
)


class CatalogDAO:
    """Read-through access to information_schema. Nothing is cached."""

    def __init__(self, db_session: Session, schema: str):
        self.db = db_session
        self.schema = schema

    def get_table_names(self) -> List[str]:
        """Get all table names in the default schema, ordered by name."""
        result = self.db.execute(TABLE_NAMES_SQL, {"schema": self.schema})
        return [row[0] for row in result]

    def get_first_table_name(self) -> Optional[str]:
        """Get the first table name in the default schema, if any."""
        names = self.get_table_names()
        return names[0] if names else None

    def get_columns(self, table_name: str) -> List[ColumnInfo]:
        """Get the columns of a table ordered by ordinal position."""
        result = self.db.execute(COLUMNS_SQL, {"table_name": table_name, "schema": self.schema})
        return [
            ColumnInfo(name=row["name"], type=str(row["type"]), nullable=bool(row["nullable"]))
            for row in result.mappings()
        ]
