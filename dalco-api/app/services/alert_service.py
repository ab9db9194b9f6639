"""Operator alerts via a Telegram bot, used when a customer-facing step fails hard."""

from typing import Optional

import httpx

from app.config import settings
from app.logging_config import get_logger

logger = get_logger("alert_service")

TELEGRAM_API_URL = "https://api.telegram.org"
LEVEL_MARKERS = {"INFO": "ℹ️", "WARNING": "⚠️", "ERROR": "❌", "CRITICAL": "🔥"}


def format_alert(level: str, message: str, context: Optional[dict] = None) -> str:
    text = f"{LEVEL_MARKERS.get(level, '📢')} *DalCo {level}*\n\n{message}"
    if context:
        context_str = "\n".join(f"  {key}: {value}" for key, value in context.items())
        text += f"\n\n```\n{context_str}\n```"
    return text


def send_alert(level: str, message: str, context: Optional[dict] = None) -> bool:
    """Send alert to the operator chat. Returns True if Telegram accepted it."""
    bot_token = settings.alert_bot_token
    chat_id = settings.alert_chat_id
    if not bot_token or not chat_id:
        logger.info(f"Alert not configured: {level} - {message}")
        return False

    try:
        with httpx.Client(timeout=10) as client:
            response = client.post(
                f"{TELEGRAM_API_URL}/bot{bot_token}/sendMessage",
                json={"chat_id": chat_id, "text": format_alert(level, message, context), "parse_mode": "Markdown"},
            )
            return response.status_code == 200
    except Exception as e:
        logger.error(f"Failed to send alert: {e}")
        return False


def alert_order_failure(customer_name: str, phone_number: str, reason: str) -> bool:
    return send_alert(
        "ERROR",
        "Order could not be recorded",
        {"customer": customer_name, "phone": phone_number, "reason": reason[:200]},
    )
