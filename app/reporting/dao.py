"""Data Access Objects for report templates."""

from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from datetime import datetime
from app.reporting.models import ReportTemplate


class ReportTemplateDAO:
    """DAO for ReportTemplate operations."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def get_all(self) -> List[ReportTemplate]:
        """Get all templates ordered by ID."""
        stmt = select(ReportTemplate).order_by(ReportTemplate.id)
        result = self.db.execute(stmt)
        return list(result.scalars().all())

    def get_by_id(self, template_id: int) -> Optional[ReportTemplate]:
        """Get a template by ID."""
        return self.db.get(ReportTemplate, template_id)

    def create(self, name: str, sql: str) -> ReportTemplate:
        """Create a template with a database-allocated ID."""
        now = datetime.now()
        template = ReportTemplate(name=name, sql=sql, created_at=now, updated_at=now)

        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        return template

    def update(self, template: ReportTemplate, name: str, sql: str) -> ReportTemplate:
        """Overwrite a template and advance its updated_at."""
        template.name = name
        template.sql = sql
        template.updated_at = datetime.now()

        self.db.commit()
        self.db.refresh(template)
        return template

    def delete(self, template_id: int) -> bool:
        """Hard delete a template by ID."""
        template = self.get_by_id(template_id)
        if not template:
            return False
        self.db.delete(template)
        self.db.commit()
        return True
