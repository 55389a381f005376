from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..errors import StoreError
from ..repository import ReportRepository
from .reports import get_repo

router = APIRouter()


@router.get("/health")
def health(repo: ReportRepository = Depends(get_repo)):
    """Liveness of the service and of its report store."""
    try:
        repo.ping()
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "ok", "store": "ok"}
