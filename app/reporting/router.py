"""API router for report templates."""

from typing import List, Dict
from fastapi import APIRouter, Depends

from app.core.dependencies import SessionDep
from app.reporting.dao import ReportTemplateDAO
from app.reporting.schemas import ReportTemplateRead, ReportTemplateWrite
from app.reporting.service import ReportTemplateService

router = APIRouter(prefix="/templates", tags=["templates"])


# Dependency functions
def get_template_dao(db: SessionDep) -> ReportTemplateDAO:
    return ReportTemplateDAO(db)


def get_template_service(dao: ReportTemplateDAO = Depends(get_template_dao)) -> ReportTemplateService:
    return ReportTemplateService(dao)


# ===== TEMPLATE ENDPOINTS =====


@router.get("", response_model=List[ReportTemplateRead])
def get_templates(service: ReportTemplateService = Depends(get_template_service)) -> List[ReportTemplateRead]:
    """Get all report templates."""
    return service.get_all()


@router.post("", response_model=ReportTemplateRead)
def save_template(
    template: ReportTemplateWrite, service: ReportTemplateService = Depends(get_template_service)
) -> ReportTemplateRead:
    """Create a template, or overwrite the one with the given id."""
    return service.save(template)


@router.delete("/{template_id}")
def delete_template(
    template_id: int, service: ReportTemplateService = Depends(get_template_service)
) -> Dict[str, str]:
    """Delete a report template."""
    return service.delete(template_id)
