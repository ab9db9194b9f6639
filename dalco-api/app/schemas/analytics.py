from typing import Optional

from pydantic import BaseModel


class InsightsRequest(BaseModel):
    metrics: Optional[dict] = None


class InsightsResponse(BaseModel):
    success: bool
    insights: str


class OverviewResponse(BaseModel):
    success: bool
    data: dict
