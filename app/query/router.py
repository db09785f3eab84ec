"""API router for query execution and CSV export."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.core.config import CATALOG_SCHEMA
from app.core.dependencies import ReportingSessionDep
from app.catalog.dao import CatalogDAO
from app.catalog.service import CatalogService
from app.query.export import CsvExportWriter, ExportFileError
from app.query.schemas import QueryRequest, QueryResponse
from app.query.service import QueryService

router = APIRouter(tags=["query"])


# ===== DEPENDENCY INJECTION =====

def get_query_service(db: ReportingSessionDep) -> QueryService:
    """Get QueryService sharing one reporting session with its catalog lookups."""
    return QueryService(db, CatalogService(CatalogDAO(db, CATALOG_SCHEMA)))


def get_export_writer() -> CsvExportWriter:
    """Get CsvExportWriter instance."""
    return CsvExportWriter()


# ===== QUERY ENDPOINTS =====

@router.post("/query", response_model=QueryResponse)
def run_query(request: QueryRequest, service: QueryService = Depends(get_query_service)) -> QueryResponse:
    """Run a composed or literal query and return one page of results."""
    return service.execute(request)


@router.post("/export")
def export_to_csv(
    request: QueryRequest,
    service: QueryService = Depends(get_query_service),
    writer: CsvExportWriter = Depends(get_export_writer),
) -> FileResponse:
    """Export up to the export page size of query results as a CSV attachment."""
    columns, rows = service.fetch_for_export(request)

    try:
        path, file_name = writer.write(columns, rows)
    except ExportFileError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return FileResponse(path, media_type="text/csv", filename=file_name)
