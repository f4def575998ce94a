from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventease.core.config import settings
from eventease.core.database import get_db
from eventease.schemas.dashboard import DashboardResponse
from eventease.services.dashboard_service import DashboardService

router = APIRouter(tags=["Dashboard"])


@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db)):
    return DashboardResponse(**DashboardService(db).get_summary())
