from typing import Optional

from app.services.commerce_types import DashboardMetrics
from app.services.intent_service import IntentService
from app.services.order_service import OrderService


def get_overview(orders: OrderService) -> DashboardMetrics:
    return orders.get_dashboard_metrics()


def generate_insights(intents: IntentService, orders: OrderService, metrics: Optional[dict] = None) -> str:
    """Sales-trend insights for the supplied metrics, or the live dashboard when none are given."""
    if not metrics:
        metrics = orders.get_dashboard_metrics().to_dict()
    return intents.analyze_sales_trends(metrics)
