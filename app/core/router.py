# app/core/router.py
"""
Module for registering routes in the FastAPI application.
"""

from fastapi import FastAPI

from app.catalog.router import router as catalog_router
from app.query.router import router as query_router
from app.reporting.router import router as template_router


def register_routes(app: FastAPI) -> None:
    """
    Registers all the routes for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.include_router(catalog_router, prefix="/api")
    app.include_router(query_router, prefix="/api")
    app.include_router(template_router, prefix="/api")
