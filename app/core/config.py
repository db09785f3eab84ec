# app/core/config.py
"""Environment-driven settings for the report builder."""

import os
from sqlalchemy.engine import URL
from dotenv import load_dotenv

load_dotenv()


def _build_reporting_url() -> str:
    """Assemble the reporting database URL from discrete DB_* variables."""
    url = URL.create(
        "postgresql+psycopg",
        username=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASSWORD") or None,
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "reportdb"),
        query={"sslmode": os.getenv("DB_SSLMODE", "disable")},
    )
    return url.render_as_string(hide_password=False)


# ===== DATABASES =====
# Reporting DB is the catalog users browse and query; config DB stores templates and logs.
REPORTING_DATABASE_URL = os.getenv("REPORTING_DATABASE_URL") or _build_reporting_url()
DATABASE_URL = os.getenv("DATABASE_URL") or REPORTING_DATABASE_URL

CATALOG_SCHEMA = os.getenv("CATALOG_SCHEMA", "public")

# ===== QUERY EXECUTION =====
DEFAULT_PAGE_SIZE = 50
EXPORT_PAGE_SIZE = 10000
QUERY_TIMEOUT_MS = int(os.getenv("QUERY_TIMEOUT_MS", "10000"))
VALIDATE_IDENTIFIERS = os.getenv("VALIDATE_IDENTIFIERS", "true").lower() == "true"

# ===== EXPORT =====
EXPORT_DIR = os.getenv("EXPORT_DIR", ".")

# ===== HTTP =====
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

APPLICATION_ID = os.environ.get("APPLICATION_ID", "report-builder")
