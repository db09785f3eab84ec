# app/core/dependencies.py
"""Shared FastAPI dependencies"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session
from app.core.database import get_db, get_reporting_db

# Core database dependencies
SessionDep = Annotated[Session, Depends(get_db)]
ReportingSessionDep = Annotated[Session, Depends(get_reporting_db)]
