from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from src.database import get_db
from src.admin.aggregation_service import AggregationService, DEFAULT_WINDOW_DAYS
from src.admin.schemas import (
    DashboardStatsResponse, AnalyticsResponse, AnalyticsEventOut
)
from src.exceptions import PersistenceError

router = APIRouter()

# Dashboard Endpoints
@router.get("/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(db: Session = Depends(get_db)):
    """Get admin dashboard stats"""

    aggregation_service = AggregationService(db)

    try:
        stats = aggregation_service.compute_dashboard_stats()
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return DashboardStatsResponse(stats=stats)

# Analytics Endpoints
@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(
    event_type: Optional[str] = Query(None, description="Filter by event type"),
    days: int = Query(DEFAULT_WINDOW_DAYS, ge=0, le=3650, description="Look-back window in days"),
    db: Session = Depends(get_db)
):
    """Replay usage events recorded in the last ``days`` days"""

    aggregation_service = AggregationService(db)

    try:
        events = aggregation_service.compute_analytics(event_type=event_type, window_days=days)
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return AnalyticsResponse(analytics=[AnalyticsEventOut.from_orm(e) for e in events])
