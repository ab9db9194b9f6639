from typing import Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_intent_service, get_order_service
from app.schemas.analytics import InsightsRequest, InsightsResponse, OverviewResponse
from app.services.analytics_service import generate_insights, get_overview
from app.services.intent_service import IntentService
from app.services.order_service import OrderService

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/overview", response_model=OverviewResponse)
def overview(orders: OrderService = Depends(get_order_service)):
    return OverviewResponse(success=True, data=get_overview(orders).to_dict())


@router.post("/insights", response_model=InsightsResponse)
def insights(
    body: Optional[InsightsRequest] = None,
    intents: IntentService = Depends(get_intent_service),
    orders: OrderService = Depends(get_order_service),
):
    metrics = body.metrics if body else None
    return InsightsResponse(success=True, insights=generate_insights(intents, orders, metrics))
