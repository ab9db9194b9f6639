from typing import Any, List, Optional

from app.logging_config import get_logger
from app.services.commerce_types import AvailabilityResult, InventoryItem, InventoryQuery
from app.services.sheets_client import SheetsClient

logger = get_logger("inventory_service")

CATALOG_COLUMNS = 6


def _to_int(value: Any) -> int:
    try:
        return max(int(float(value)), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_catalog_row(row: list) -> InventoryItem:
    """Sheets drops trailing empty cells, so short rows are padded."""
    cells = [("" if cell is None else str(cell)) for cell in row[:CATALOG_COLUMNS]]
    cells += [""] * (CATALOG_COLUMNS - len(cells))
    sku, name, color, size, stock, price = cells
    return InventoryItem(
        sku=sku,
        name=name,
        color=color,
        size=size,
        stock=_to_int(stock),
        price=_to_float(price),
    )


def find_match(inventory: List[InventoryItem], query: InventoryQuery) -> Optional[InventoryItem]:
    """First item in catalog order matching name, and color/size when asked for."""
    target_name = query.item_name.lower()
    target_color = query.attributes.color.lower() if query.attributes.color else None
    target_size = query.attributes.size.upper() if query.attributes.size else None

    for item in inventory:
        matches_name = target_name in item.name.lower()
        matches_color = target_color in item.color.lower() if target_color else True
        matches_size = item.size.upper() == target_size if target_size else True
        if matches_name and matches_color and matches_size:
            return item
    return None


class InventoryService:
    def __init__(self, sheets: SheetsClient, inventory_range: str = "Inventory!A2:F"):
        self.sheets = sheets
        self.inventory_range = inventory_range

    def read_inventory(self) -> List[InventoryItem]:
        rows = self.sheets.get_values(self.inventory_range)
        return [parse_catalog_row(row) for row in rows if row]

    def check_availability(self, query: InventoryQuery) -> AvailabilityResult:
        # re-read every time, stock changes outside this service
        inventory = self.read_inventory()
        match = find_match(inventory, query)

        if match is None:
            logger.info(
                "No catalog match",
                extra={"context": {"item_name": query.item_name, "catalog_size": len(inventory)}},
            )
            return AvailabilityResult(available=False)

        return AvailabilityResult(
            available=match.stock >= query.quantity,
            item=match,
            remaining_stock=match.stock,
        )
