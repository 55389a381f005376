from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from ..errors import StoreError
from ..models import Report
from ..repository import ReportRepository

router = APIRouter()
logger = logging.getLogger(__name__)


class ReportBody(BaseModel):
    """Wire form of a report; keys keep the capitalized names clients already send."""

    model_config = ConfigDict(populate_by_name=True)

    # null decodes like a missing key
    id: int | None = Field(0, alias="ID")
    header: str | None = Field("", alias="Header")
    description: str | None = Field("", alias="Description")
    author: str | None = Field("", alias="Author")
    lat: float | None = Field(0.0, alias="Lat")
    lon: float | None = Field(0.0, alias="Lon")
    community: str | None = Field("", alias="Community")

    def to_report(self) -> Report:
        return Report(
            id=self.id or 0,
            header=self.header or "",
            description=self.description or "",
            author=self.author or "",
            lat=self.lat or 0.0,
            lon=self.lon or 0.0,
            community=self.community or "",
        )

    @classmethod
    def from_report(cls, r: Report) -> "ReportBody":
        return cls(
            id=r.id,
            header=r.header,
            description=r.description,
            author=r.author,
            lat=r.lat,
            lon=r.lon,
            community=r.community,
        )


def get_repo(request: Request) -> ReportRepository:
    return request.app.state.repo


@router.get("/", response_model=list[ReportBody])
def api_reports_list(repo: ReportRepository = Depends(get_repo)):
    try:
        return [ReportBody.from_report(r) for r in repo.list()]
    except StoreError as e:
        logger.error("list reports failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/report", response_model=ReportBody)
def api_report_add(body: ReportBody, repo: ReportRepository = Depends(get_repo)):
    report = body.to_report()
    try:
        report.id = repo.add(report)
        return ReportBody.from_report(report)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except StoreError as e:
        logger.error("add report failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
