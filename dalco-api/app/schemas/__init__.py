from app.schemas.analytics import InsightsRequest, InsightsResponse, OverviewResponse
from app.schemas.lead import LeadCreate, LeadCreated, LeadList
from app.schemas.message import MessageResponse, WhatsAppMessageRequest

__all__ = [
    "WhatsAppMessageRequest",
    "MessageResponse",
    "LeadCreate",
    "LeadCreated",
    "LeadList",
    "InsightsRequest",
    "InsightsResponse",
    "OverviewResponse",
]
