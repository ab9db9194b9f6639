"""Service wiring for the routers.

Long-lived clients are built once per process from ``settings``; routers get
them through ``Depends`` so tests can swap them via ``dependency_overrides``.
"""

from typing import Optional

from app.config import RemoteIntentConfig, settings
from app.database import SessionLocal
from app.logging_config import get_logger
from app.services.conversation_service import ConversationLogger
from app.services.intent_service import IntentService
from app.services.inventory_service import InventoryService
from app.services.jamai_client import JamAIClient
from app.services.order_service import OrderService
from app.services.pipeline_service import MessagePipeline
from app.services.sheets_client import SheetsClient, service_account_token_provider

logger = get_logger("dependencies")

_intent_service: Optional[IntentService] = None
_sheets_client: Optional[SheetsClient] = None


def get_intent_service() -> IntentService:
    global _intent_service
    if _intent_service is None:
        _intent_service = IntentService(
            RemoteIntentConfig.from_settings(settings),
            JamAIClient(
                base_url=settings.jamai_base_url,
                api_key=settings.jamai_api_key,
                timeout_seconds=settings.remote_timeout_seconds,
            ),
        )
    return _intent_service


def get_sheets_client() -> SheetsClient:
    global _sheets_client
    if _sheets_client is None:
        token_provider = None
        if settings.google_service_account_email and settings.google_private_key:
            token_provider = service_account_token_provider(
                settings.google_service_account_email,
                settings.google_private_key,
            )
        else:
            logger.warning("Google Sheets credentials missing, catalog and orders unavailable")
        _sheets_client = SheetsClient(
            spreadsheet_id=settings.google_sheets_spreadsheet_id,
            token_provider=token_provider,
            timeout_seconds=settings.remote_timeout_seconds,
        )
    return _sheets_client


def get_inventory_service() -> InventoryService:
    return InventoryService(get_sheets_client(), settings.google_sheets_inventory_range)


def get_order_service() -> OrderService:
    return OrderService(get_sheets_client(), settings.google_sheets_order_range)


def get_conversation_logger() -> ConversationLogger:
    return ConversationLogger(SessionLocal)


def get_pipeline() -> MessagePipeline:
    return MessagePipeline(
        intents=get_intent_service(),
        inventory=get_inventory_service(),
        orders=get_order_service(),
        journal=get_conversation_logger(),
    )
