"""Pydantic schemas for the catalog module."""

from typing import List
from pydantic import BaseModel, ConfigDict


class ColumnInfo(BaseModel):
    """A column as reported by information_schema."""

    name: str
    type: str
    nullable: bool

    model_config = ConfigDict(from_attributes=True)


class TableInfo(BaseModel):
    """A table with its columns in ordinal order."""

    name: str
    columns: List[ColumnInfo] = []
