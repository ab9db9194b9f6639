import asyncio
from typing import Callable, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.config import Settings
from app.logging_config import get_logger
from app.services.intent_service import IntentService
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService
from app.services.result import ResultSource

logger = get_logger("system_service")

REQUIRED_GROUPS = {
    "database": ["database_url"],
    "jamai": [
        "jamai_api_key",
        "jamai_project_id",
        "jamai_base_url",
        "jamai_intent_action_table_id",
        "jamai_faq_knowledge_table_id",
        "jamai_inventory_action_table_id",
        "jamai_order_action_table_id",
        "jamai_analytics_generative_table_id",
    ],
    "googleSheets": [
        "google_service_account_email",
        "google_private_key",
        "google_sheets_spreadsheet_id",
        "google_sheets_inventory_range",
        "google_sheets_order_range",
    ],
}

HEALTH_CHECK_MESSAGE = "health check message"


def check_settings_group(config: Settings, group: str) -> dict:
    keys = REQUIRED_GROUPS.get(group, [])
    missing = [key.upper() for key in keys if not str(getattr(config, key, None) or "").strip()]
    return {
        "group": group,
        "total": len(keys),
        "missing": missing,
        "satisfied": not missing,
    }


def get_config_report(config: Settings) -> list[dict]:
    return [check_settings_group(config, group) for group in REQUIRED_GROUPS]


def check_database(session_factory: Callable[[], Session]) -> dict:
    try:
        db = session_factory()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
        return {"healthy": True}
    except Exception as exc:
        logger.error(f"Database check failed: {exc}")
        return {"healthy": False, "error": str(exc)}


def check_jamai(intents: IntentService) -> dict:
    if not intents.config.intent_table_id:
        return {"healthy": False, "error": "JamAI table IDs missing"}

    resolved = intents.resolve_intent(HEALTH_CHECK_MESSAGE)
    return {
        "healthy": resolved.source == ResultSource.REMOTE,
        "sampleIntent": resolved.value.value,
        "source": resolved.source.value,
    }


def check_google_sheets(inventory: InventoryService, orders: OrderService) -> dict:
    try:
        items = inventory.read_inventory()
    except Exception as exc:
        logger.error(f"Google Sheets check failed: {exc}")
        return {"healthy": False, "error": str(exc)}

    metrics = orders.get_dashboard_metrics()
    return {
        "healthy": True,
        "sampleInventoryCount": len(items),
        "metricsSummary": {
            "totalOrders": metrics.total_orders,
            "topProduct": metrics.top_product,
        },
    }


async def get_system_status(
    config: Settings,
    *,
    deep: bool = False,
    session_factory: Optional[Callable[[], Session]] = None,
    intents: Optional[IntentService] = None,
    inventory: Optional[InventoryService] = None,
    orders: Optional[OrderService] = None,
) -> dict:
    """Config report, plus live probes of each backing service when ``deep`` is set.

    The probes are independent, so they run concurrently in worker threads.
    """
    report = get_config_report(config)
    if not deep:
        return {"config": report, "deepChecks": None}

    database, jamai, sheets = await asyncio.gather(
        asyncio.to_thread(check_database, session_factory),
        asyncio.to_thread(check_jamai, intents),
        asyncio.to_thread(check_google_sheets, inventory, orders),
    )
    return {
        "config": report,
        "deepChecks": {
            "database": database,
            "jamai": jamai,
            "googleSheets": sheets,
        },
    }
