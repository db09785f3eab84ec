"""
Test configuration and shared fixtures for the report builder test suite.
Provides the config and reporting databases, a test client, and sample data.
"""

import os

# Point the application's own engines at in-memory SQLite before any app import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REPORTING_DATABASE_URL"] = "sqlite://"

import pytest
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.app import create_app
from app.core.database import Base, get_db, get_reporting_db
from app.query.export import CsvExportWriter
from app.query.router import get_export_writer


# ===== SAMPLE REPORTING SCHEMA =====

REPORTING_DDL = [
    "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER, city TEXT)",
    "CREATE TABLE emp (id INTEGER PRIMARY KEY, dept TEXT NOT NULL, salary NUMERIC)",
    "CREATE TABLE information_schema.tables (table_schema TEXT, table_name TEXT)",
    """CREATE TABLE information_schema.columns (
        table_schema TEXT, table_name TEXT, column_name TEXT,
        data_type TEXT, is_nullable TEXT, ordinal_position INTEGER
    )""",
]

USERS = [
    (1, "alice", 30, "Paris"),
    (2, "bob", 17, "Berlin"),
    (3, "carol", 45, None),
    (4, "dan", 22, "Paris"),
    (5, "eve", 19, "Rome"),
]

EMPLOYEES = [
    (1, "eng", 100),
    (2, "eng", 120),
    (3, "ops", 80),
]

CATALOG_COLUMNS = [
    ("users", "id", "integer", "NO", 1),
    ("users", "name", "text", "NO", 2),
    ("users", "age", "integer", "YES", 3),
    ("users", "city", "text", "YES", 4),
    ("emp", "id", "integer", "NO", 1),
    ("emp", "dept", "text", "NO", 2),
    ("emp", "salary", "numeric", "YES", 3),
]


def _attach_information_schema(dbapi_connection, connection_record):
    """SQLite has no information_schema; attach an empty database under that name."""
    dbapi_connection.execute("ATTACH DATABASE ':memory:' AS information_schema")


# ===== DATABASE SETUP =====

@pytest.fixture(scope="session")
def config_engine():
    """Create in-memory SQLite engine for the config database"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    from app.reporting.models import ReportTemplate  # noqa: F401
    from app.logging.models import Log  # noqa: F401
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="function")
def reporting_engine():
    """Create an in-memory SQLite reporting database with a mirrored information_schema"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _attach_information_schema)

    with engine.begin() as conn:
        for ddl in REPORTING_DDL:
            conn.exec_driver_sql(ddl)
        conn.exec_driver_sql("INSERT INTO users VALUES (?, ?, ?, ?)", USERS)
        conn.exec_driver_sql("INSERT INTO emp VALUES (?, ?, ?)", EMPLOYEES)
        conn.exec_driver_sql(
            "INSERT INTO information_schema.tables VALUES ('public', ?)",
            [("users",), ("emp",)],
        )
        conn.exec_driver_sql(
            "INSERT INTO information_schema.columns VALUES ('public', ?, ?, ?, ?, ?)",
            CATALOG_COLUMNS,
        )

    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def config_db_session(config_engine) -> Generator[Session, None, None]:
    """Create a database session for the config database"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=config_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        # Clean up all data after each test
        Base.metadata.drop_all(bind=config_engine)
        Base.metadata.create_all(bind=config_engine)


@pytest.fixture(scope="function")
def reporting_db_session(reporting_engine) -> Generator[Session, None, None]:
    """Create a database session for the reporting database"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=reporting_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def export_dir(tmp_path):
    """Directory receiving CSV exports"""
    return tmp_path


@pytest.fixture
def client(config_db_session, reporting_db_session, export_dir):
    """Create FastAPI test client with database overrides"""
    app = create_app()

    def override_get_db():
        try:
            yield config_db_session
        finally:
            pass

    def override_get_reporting_db():
        try:
            yield reporting_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reporting_db] = override_get_reporting_db
    app.dependency_overrides[get_export_writer] = lambda: CsvExportWriter(str(export_dir))

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ===== REQUEST FIXTURES =====

@pytest.fixture
def api_headers():
    """Standard JSON headers used by the UI"""
    return {"Content-Type": "application/json", "Origin": "http://localhost:3000"}
