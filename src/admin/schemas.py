from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime

# Dashboard
class DashboardStats(BaseModel):
    """Aggregate snapshot recomputed on every request"""
    totalBookings: int = 0
    totalRevenue: int = 0
    totalCustomers: int = 0
    activeVehicles: int = 0

class DashboardStatsResponse(BaseModel):
    success: bool = True
    stats: DashboardStats

# Analytics
class AnalyticsEventOut(BaseModel):
    id: int
    event_type: str
    event_data: Optional[Dict[str, Any]] = None
    page_url: Optional[str] = ""
    user_ip: Optional[str] = ""
    user_agent: Optional[str] = ""
    session_id: Optional[str] = ""
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class AnalyticsResponse(BaseModel):
    success: bool = True
    analytics: List[AnalyticsEventOut] = Field(default_factory=list)
