# app/reporting/service.py

import logging
from typing import List, Dict
from fastapi import HTTPException

from app.reporting.dao import ReportTemplateDAO
from app.reporting.models import ReportTemplate
from app.reporting.schemas import ReportTemplateRead, ReportTemplateWrite

logger = logging.getLogger(__name__)


class ReportTemplateService:
    """Template store: list, upsert by id, delete by id."""

    def __init__(self, template_dao: ReportTemplateDAO):
        self.dao = template_dao

    def get_all(self) -> List[ReportTemplateRead]:
        """Get all templates."""
        return [self._to_response(t) for t in self.dao.get_all()]

    def save(self, data: ReportTemplateWrite) -> ReportTemplateRead:
        """Create or overwrite a template, echoing the transient columns and filters."""
        existing = self.dao.get_by_id(data.id) if data.id else None

        if existing:
            template = self.dao.update(existing, data.name, data.sql)
            logger.info(f"Updated report template {template.id}")
        else:
            # Unknown ids are not reused; the row gets a fresh id from the database.
            template = self.dao.create(data.name, data.sql)
            logger.info(f"Created report template {template.id}")

        response = self._to_response(template)
        response.columns = data.columns
        response.filters = data.filters
        return response

    def delete(self, template_id: int) -> Dict[str, str]:
        """Delete a template by ID."""
        if not self.dao.delete(template_id):
            raise HTTPException(status_code=404, detail="Template not found")
        logger.info(f"Deleted report template {template_id}")
        return {"message": "Template deleted successfully"}

    def _to_response(self, template: ReportTemplate) -> ReportTemplateRead:
        return ReportTemplateRead.model_validate(template)
