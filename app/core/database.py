# app/core/database.py
"""Database configuration for the config store and the reporting catalog."""

import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import DATABASE_URL, REPORTING_DATABASE_URL

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """SQLite needs cross-thread access; in-memory SQLite must share one connection."""
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options


# ===== CONFIG DATABASE =====
# Stores report templates and request logs.
engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# ===== REPORTING DATABASE =====
# The database whose tables are browsed, queried and exported.
if REPORTING_DATABASE_URL == DATABASE_URL:
    reporting_engine = engine
else:
    reporting_engine = create_engine(REPORTING_DATABASE_URL, **_engine_options(REPORTING_DATABASE_URL))
ReportingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=reporting_engine)


# ===== SESSION GENERATORS =====


def get_db():
    """Get config database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_reporting_db():
    """Get reporting database session."""
    db = ReportingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# ===== INITIALIZATION =====


def create_all_tables():
    """Create the config database tables."""
    # Import models to ensure they're registered with Base
    from app.reporting.models import ReportTemplate  # noqa: F401
    from app.logging.models import Log  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_reporting_connection():
    """Open one round-trip to the reporting database; raises on failure."""
    with reporting_engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db():
    """Verify connectivity and create tables. Errors propagate to the caller."""
    check_reporting_connection()
    create_all_tables()
    logger.info("Database initialization complete")
