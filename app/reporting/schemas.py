"""Pydantic schemas for report templates."""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, field_validator, ConfigDict

from app.query.schemas import Filter


class ReportTemplateBase(BaseModel):
    """Base schema for report templates."""

    name: str
    sql: str = ""
    columns: Optional[List[str]] = None  # echoed, not persisted
    filters: Optional[List[Filter]] = None  # echoed, not persisted

    model_config = ConfigDict(from_attributes=True)


class ReportTemplateWrite(ReportTemplateBase):
    """Upsert payload: an absent or zero id creates a new template."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Template name cannot be empty")
        return v.strip()


class ReportTemplateRead(ReportTemplateBase):
    """Stored template as returned by the API."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
