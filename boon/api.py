"""
FastAPI app factory. The repository is built by the caller and handed in;
routes reach it through app.state.
"""
from __future__ import annotations


from fastapi import FastAPI

from . import __version__
from .repository import ReportRepository
from .routes import base as base_routes
from .routes import reports as reports_routes


def create_app(repo: ReportRepository) -> FastAPI:
    app = FastAPI(title="boon-api", version=__version__)
    app.state.repo = repo

    app.include_router(base_routes.router)
    app.include_router(reports_routes.router)
    return app
