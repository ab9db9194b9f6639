"""Remote intent detection and extraction with a deterministic fallback.

Each capability follows the same rule: if its table id is configured and the
JamAI call yields the expected field, the remote value is used; otherwise the
matching function from :mod:`app.services.fallback_classifier` answers.
Nothing here raises to the caller.
"""

from typing import Any, Callable, Optional, TypeVar

from app.config import RemoteIntentConfig
from app.logging_config import get_logger
from app.services import fallback_classifier
from app.services.commerce_types import Intent, InventoryQuery, Order
from app.services.jamai_client import JamAIClient
from app.services.result import Resolved

logger = get_logger("intent_service")

T = TypeVar("T")

FAQ_LANGUAGE = "ms-en"
ANALYTICS_PROMPT = "Analyze SME sales trends"


def _parse_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, list):
        parts = [str(part).strip() for part in value if str(part).strip()]
        return " ".join(parts) or None
    return None


class IntentService:
    def __init__(self, config: RemoteIntentConfig, client: JamAIClient):
        self.config = config
        self.client = client

    def _resolve(
        self,
        capability: str,
        table_type: str,
        table_id: Optional[str],
        payload: dict,
        field: str,
        parse: Callable[[Any], Optional[T]],
        fallback: Callable[[], T],
    ) -> Resolved[T]:
        if not table_id:
            logger.debug(f"{capability}: no table configured, using fallback")
            return Resolved.fallback(fallback())

        result = self.client.invoke_table(table_type, table_id, payload)
        if not result.ok:
            logger.warning(
                f"{capability}: remote call failed, using fallback",
                extra={"context": {"capability": capability, "error": result.error, "code": result.error_code}},
            )
            return Resolved.fallback(fallback())

        try:
            value = parse(result.value.get(field))
        except Exception as exc:
            logger.warning(
                f"{capability}: response could not be parsed, using fallback",
                extra={"context": {"capability": capability, "field": field, "error": str(exc)}},
            )
            return Resolved.fallback(fallback())

        if value is None:
            logger.warning(
                f"{capability}: response has no usable '{field}', using fallback",
                extra={"context": {"capability": capability, "field": field}},
            )
            return Resolved.fallback(fallback())

        return Resolved.remote(value)

    def resolve_intent(self, message: str) -> Resolved[Intent]:
        return self._resolve(
            "detect_intent",
            "action",
            self.config.intent_table_id,
            {"input": {"message": message}},
            "intent",
            Intent.parse,
            lambda: fallback_classifier.detect_intent(message),
        )

    def resolve_faq_answer(self, query: str) -> Resolved[str]:
        return self._resolve(
            "answer_faq",
            "knowledge",
            self.config.faq_table_id,
            {"query": query, "options": {"language": FAQ_LANGUAGE}},
            "answer",
            _parse_text,
            lambda: fallback_classifier.answer_faq(query),
        )

    def resolve_inventory_query(self, message: str) -> Resolved[InventoryQuery]:
        return self._resolve(
            "extract_inventory_query",
            "action",
            self.config.inventory_table_id,
            {"input": {"message": message}},
            "inventoryRequest",
            InventoryQuery.from_payload,
            lambda: fallback_classifier.extract_inventory_query(message),
        )

    def resolve_order(self, message: str, phone_number: str, display_name: Optional[str] = None) -> Resolved[Order]:
        return self._resolve(
            "extract_order",
            "action",
            self.config.order_table_id,
            {"input": {"message": message, "phoneNumber": phone_number, "displayName": display_name}},
            "order",
            lambda payload: Order.from_payload(payload, phone_number, display_name),
            lambda: fallback_classifier.extract_order(message, phone_number, display_name),
        )

    def resolve_sales_trends(self, metrics: Optional[dict] = None) -> Resolved[str]:
        return self._resolve(
            "analyze_sales_trends",
            "generative",
            self.config.analytics_table_id,
            {"input": {"prompt": ANALYTICS_PROMPT, "data": metrics or {}}},
            "insights",
            _parse_text,
            lambda: fallback_classifier.analyze_sales_trends(metrics),
        )

    def detect_intent(self, message: str) -> Intent:
        return self.resolve_intent(message).value

    def answer_faq(self, query: str) -> str:
        return self.resolve_faq_answer(query).value

    def extract_inventory_query(self, message: str) -> InventoryQuery:
        return self.resolve_inventory_query(message).value

    def extract_order(self, message: str, phone_number: str, display_name: Optional[str] = None) -> Order:
        return self.resolve_order(message, phone_number, display_name).value

    def analyze_sales_trends(self, metrics: Optional[dict] = None) -> str:
        return self.resolve_sales_trends(metrics).value
