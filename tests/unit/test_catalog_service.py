"""
Unit tests for the catalog service.
"""

import pytest
from unittest.mock import Mock
from fastapi import HTTPException
from sqlalchemy.exc import ProgrammingError

from app.catalog.schemas import ColumnInfo
from app.catalog.service import CatalogService


def _catalog_error():
    return ProgrammingError("SELECT ...", {}, Exception("permission denied for schema information_schema"))


@pytest.fixture
def mock_dao():
    dao = Mock()
    dao.get_table_names = Mock(return_value=["emp", "users"])
    dao.get_columns = Mock(
        side_effect=lambda name: [ColumnInfo(name=f"{name}_id", type="integer", nullable=False)]
    )
    return dao


@pytest.fixture
def catalog_service(mock_dao):
    return CatalogService(mock_dao)


class TestListTables:
    def test_tables_with_columns_in_catalog_order(self, catalog_service):
        tables = catalog_service.list_tables()
        assert [t.name for t in tables] == ["emp", "users"]
        assert tables[1].columns[0].name == "users_id"

    def test_table_name_failure_gives_empty_list(self, catalog_service, mock_dao):
        mock_dao.get_table_names.side_effect = _catalog_error()
        assert catalog_service.list_tables() == []
        mock_dao.db.rollback.assert_called_once()

    def test_column_failure_gives_empty_list_not_partial(self, catalog_service, mock_dao):
        def columns(name):
            if name == "users":
                raise _catalog_error()
            return []

        mock_dao.get_columns.side_effect = columns
        assert catalog_service.list_tables() == []


class TestListColumns:
    @pytest.mark.parametrize("table_name", ["", "   "])
    def test_blank_table_name_is_bad_request(self, catalog_service, table_name):
        with pytest.raises(HTTPException) as exc_info:
            catalog_service.list_columns(table_name)
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Table name is required"

    def test_failure_gives_empty_list(self, catalog_service, mock_dao):
        mock_dao.get_columns.side_effect = _catalog_error()
        assert catalog_service.list_columns("users") == []


class TestDescribeTable:
    def test_known_table(self, catalog_service):
        table = catalog_service.describe_table("users")
        assert table.name == "users"
        assert [c.name for c in table.columns] == ["users_id"]

    def test_unknown_table(self, catalog_service):
        assert catalog_service.describe_table("missing") is None

    def test_first_table_name(self, catalog_service, mock_dao):
        mock_dao.get_first_table_name = Mock(return_value="emp")
        assert catalog_service.first_table_name() == "emp"
