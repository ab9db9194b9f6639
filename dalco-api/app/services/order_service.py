from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, List

from app.logging_config import get_logger
from app.services.commerce_types import DashboardMetrics, Order, OrderReference, OrderRow
from app.services.errors import OrderPersistenceError
from app.services.sheets_client import SheetsClient

logger = get_logger("order_service")

ORDER_COLUMNS = 6
LAST_ORDERS_LIMIT = 5


def _to_int(value) -> int:
    try:
        return max(int(float(value)), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_order_row(order: Order, timestamp: str) -> list:
    """Fixed 7-column projection. Only the first line item is kept."""
    line_item = order.first_item
    return [
        timestamp,
        order.customer_name,
        order.phone_number,
        line_item.item_name,
        line_item.quantity,
        order.delivery_address,
        order.notes or "",
    ]


def parse_order_row(row: list) -> OrderRow:
    cells = [("" if cell is None else str(cell)) for cell in row[:ORDER_COLUMNS]]
    cells += [""] * (ORDER_COLUMNS - len(cells))
    timestamp, customer_name, phone, item, quantity, address = cells
    return OrderRow(
        timestamp=timestamp,
        customer_name=customer_name,
        phone=phone,
        item=item,
        quantity=_to_int(quantity),
        address=address,
    )


def summarize_orders(orders: List[OrderRow]) -> DashboardMetrics:
    total_orders = len(orders)
    item_counts: dict = defaultdict(int)
    for order in orders:
        item_counts[order.item] += order.quantity

    top_product = None
    top_product_share = 0
    if item_counts:
        # ties resolve to the item seen first
        top_product, top_quantity = max(item_counts.items(), key=lambda entry: entry[1])
        top_product_share = round(top_quantity / max(1, total_orders) * 100)

    return DashboardMetrics(
        total_orders=total_orders,
        top_product=top_product,
        top_product_share=top_product_share,
        last_orders=orders[-LAST_ORDERS_LIMIT:],
    )


class OrderService:
    def __init__(
        self,
        sheets: SheetsClient,
        order_range: str = "Orders!A2:G",
        clock: Callable[[], str] = _utc_now_iso,
    ):
        self.sheets = sheets
        self.order_range = order_range
        self.clock = clock

    def append_order(self, order: Order) -> OrderReference:
        """Append one row per order. Not idempotent: a retry writes a second row."""
        if len(order.line_items) > 1:
            logger.warning(
                "Order has several line items, only the first is recorded",
                extra={"context": {"customer": order.customer_name, "line_items": len(order.line_items)}},
            )

        timestamp = self.clock()
        row = build_order_row(order, timestamp)
        try:
            updates = self.sheets.append_values(self.order_range, [row])
        except Exception as exc:
            logger.error(f"Order append failed for {order.customer_name}: {exc}")
            raise OrderPersistenceError(order.customer_name, str(exc)) from exc

        logger.info(f"Order logged to Google Sheets for {order.customer_name}")
        return OrderReference(timestamp=timestamp, updated_range=updates.get("updatedRange"))

    def read_orders(self) -> List[OrderRow]:
        rows = self.sheets.get_values(self.order_range)
        return [parse_order_row(row) for row in rows if row]

    def get_dashboard_metrics(self) -> DashboardMetrics:
        try:
            orders = self.read_orders()
        except Exception as exc:
            logger.error(f"get_dashboard_metrics failed: {exc}")
            return DashboardMetrics()
        return summarize_orders(orders)
