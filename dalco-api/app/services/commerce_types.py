"""Domain types shared by the message pipeline and its collaborators.

``to_dict`` produces the camelCase shape used on the wire and in the
conversation log. ``from_payload`` parses what the remote extraction tables
return and yields ``None`` for anything unusable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class Intent(str, Enum):
    FAQ = "faq"
    INVENTORY = "inventory"
    ORDER = "order"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: Any) -> Optional["Intent"]:
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class InboundMessage:
    text: str
    sender_id: str
    display_name: Optional[str] = None
    channel: str = "whatsapp"
    locale: str = "ms"

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("message text is required")
        if not self.sender_id or not self.sender_id.strip():
            raise ValueError("sender address is required")


@dataclass
class InventoryAttributes:
    color: Optional[str] = None
    size: Optional[str] = None

    def to_dict(self) -> dict:
        return {"color": self.color, "size": self.size}


@dataclass
class InventoryQuery:
    item_name: str
    quantity: int = 1
    attributes: InventoryAttributes = field(default_factory=InventoryAttributes)

    def to_dict(self) -> dict:
        return {
            "itemName": self.item_name,
            "quantity": self.quantity,
            "attributes": self.attributes.to_dict(),
        }

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["InventoryQuery"]:
        if not isinstance(payload, dict):
            return None
        item_name = _clean_str(payload.get("itemName"))
        if not item_name:
            return None
        attributes = payload.get("attributes") or {}
        if not isinstance(attributes, dict):
            attributes = {}
        size = _clean_str(attributes.get("size"))
        return cls(
            item_name=item_name,
            quantity=_positive_int(payload.get("quantity"), 1),
            attributes=InventoryAttributes(
                color=_clean_str(attributes.get("color")),
                size=size.upper() if size else None,
            ),
        )


@dataclass
class InventoryItem:
    sku: str
    name: str
    color: str
    size: str
    stock: int
    price: float

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "name": self.name,
            "color": self.color,
            "size": self.size,
            "stock": self.stock,
            "price": self.price,
        }


@dataclass
class AvailabilityResult:
    available: bool
    item: Optional[InventoryItem] = None
    remaining_stock: Optional[int] = None

    def to_dict(self) -> dict:
        data: dict = {"available": self.available}
        if self.item is not None:
            data["item"] = self.item.to_dict()
            data["remainingStock"] = self.remaining_stock
        return data


@dataclass
class LineItem:
    item_name: str
    quantity: int
    remarks: Optional[str] = None

    def to_dict(self) -> dict:
        return {"itemName": self.item_name, "quantity": self.quantity, "remarks": self.remarks}


@dataclass
class Order:
    customer_name: str
    phone_number: str
    line_items: List[LineItem]
    delivery_address: str
    notes: Optional[str] = None

    def __post_init__(self):
        if not self.line_items:
            raise ValueError("order needs at least one line item")

    @property
    def first_item(self) -> LineItem:
        return self.line_items[0]

    def to_dict(self) -> dict:
        return {
            "customerName": self.customer_name,
            "phoneNumber": self.phone_number,
            "lineItems": [item.to_dict() for item in self.line_items],
            "deliveryAddress": self.delivery_address,
            "notes": self.notes,
        }

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        phone_number: str,
        display_name: Optional[str] = None,
    ) -> Optional["Order"]:
        """Build an order from a remote extraction, filling contact fields from the sender."""
        if not isinstance(payload, dict):
            return None
        raw_items = payload.get("lineItems")
        if not isinstance(raw_items, list):
            return None

        line_items = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                continue
            item_name = _clean_str(raw.get("itemName"))
            if not item_name:
                continue
            line_items.append(
                LineItem(
                    item_name=item_name,
                    quantity=_positive_int(raw.get("quantity"), 1),
                    remarks=_clean_str(raw.get("remarks")),
                )
            )
        if not line_items:
            return None

        return cls(
            customer_name=_clean_str(payload.get("customerName")) or display_name or "WhatsApp Customer",
            phone_number=_clean_str(payload.get("phoneNumber")) or phone_number,
            line_items=line_items,
            delivery_address=_clean_str(payload.get("deliveryAddress")) or "To be confirmed",
            notes=_clean_str(payload.get("notes")),
        )


@dataclass
class OrderReference:
    timestamp: str
    updated_range: Optional[str] = None


@dataclass
class OrderRow:
    timestamp: str
    customer_name: str
    phone: str
    item: str
    quantity: int
    address: str

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "customerName": self.customer_name,
            "phone": self.phone,
            "item": self.item,
            "quantity": self.quantity,
            "address": self.address,
        }


@dataclass
class DashboardMetrics:
    total_orders: int = 0
    top_product: Optional[str] = None
    top_product_share: int = 0
    last_orders: List[OrderRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalOrders": self.total_orders,
            "topProduct": self.top_product,
            "topProductShare": self.top_product_share,
            "lastOrders": [row.to_dict() for row in self.last_orders],
        }
