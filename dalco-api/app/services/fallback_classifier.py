"""Keyword and regex heuristics used whenever the remote tables are unusable.

Everything here is a pure function of its arguments and never raises.
"""

import re
from typing import Optional

from app.services.commerce_types import (
    Intent,
    InventoryAttributes,
    InventoryQuery,
    LineItem,
    Order,
)

# Checked in this order; first hit wins.
INTENT_KEYWORDS = (
    (Intent.INVENTORY, ("stok", "stock", "ada tak", "availability")),
    (Intent.ORDER, ("order", "tempah", "purchase", "buy")),
    (Intent.FAQ, ("refund", "return", "policy", "time")),
)

DEFAULT_ITEM_NAME = "t-shirt"
DEFAULT_ORDER_ITEM_NAME = "Bulk T-Shirt"
DEFAULT_ORDER_QUANTITY = 10
DEFAULT_CUSTOMER_NAME = "WhatsApp Customer"
DEFAULT_DELIVERY_ADDRESS = "To be confirmed"

# Malay and English names, first hit wins.
COLOR_VOCABULARY = (
    ("blue", "Blue"),
    ("biru", "Blue"),
    ("red", "Red"),
    ("merah", "Red"),
    ("black", "Black"),
    ("hitam", "Black"),
    ("white", "White"),
    ("putih", "White"),
    ("green", "Green"),
    ("hijau", "Green"),
)

_UNIT_WORDS = r"(?:pcs|pieces|units|unit)"
INVENTORY_PATTERN = re.compile(
    rf"(\d+)\s*(?:{_UNIT_WORDS}\b)?\s*(?:of\b)?\s*((?!{_UNIT_WORDS}\b)[a-z][a-z0-9\s\-]*)?",
    re.IGNORECASE,
)
SIZE_PATTERN = re.compile(r"(?<![\w'])(xxl|xl|xs|s|m|l)(?![\w'])", re.IGNORECASE)
FIRST_INTEGER_PATTERN = re.compile(r"\d+")

FAQ_TEMPLATE = (
    'Maaf, saya tidak jumpa maklumat tepat untuk soalan "{query}". '
    "Boleh saya bantu dengan stok atau buat pesanan?"
)


def detect_intent(text: str) -> Intent:
    normalized = (text or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return intent
    return Intent.GENERAL


def extract_color(text: str) -> Optional[str]:
    normalized = (text or "").lower()
    for needle, color in COLOR_VOCABULARY:
        if needle in normalized:
            return color
    return None


def extract_size(text: str) -> Optional[str]:
    match = SIZE_PATTERN.search(text or "")
    return match.group(1).upper() if match else None


def extract_inventory_query(text: str) -> InventoryQuery:
    """Pull ``{quantity}{unit?}{item}`` out of free text, e.g. "10 pcs blue t-shirt"."""
    text = text or ""
    match = INVENTORY_PATTERN.search(text)

    quantity = 1
    item_name = None
    if match:
        quantity = int(match.group(1)) or 1
        if match.group(2):
            item_name = match.group(2).strip() or None

    return InventoryQuery(
        item_name=item_name or DEFAULT_ITEM_NAME,
        quantity=quantity,
        attributes=InventoryAttributes(color=extract_color(text), size=extract_size(text)),
    )


def extract_order(text: str, phone_number: str, display_name: Optional[str] = None) -> Order:
    text = text or ""
    match = FIRST_INTEGER_PATTERN.search(text)
    quantity = int(match.group(0)) if match else DEFAULT_ORDER_QUANTITY

    return Order(
        customer_name=display_name or DEFAULT_CUSTOMER_NAME,
        phone_number=phone_number,
        line_items=[LineItem(item_name=DEFAULT_ORDER_ITEM_NAME, quantity=quantity, remarks=text)],
        delivery_address=DEFAULT_DELIVERY_ADDRESS,
        notes=text,
    )


def answer_faq(query: str) -> str:
    return FAQ_TEMPLATE.format(query=query)


def analyze_sales_trends(metrics: Optional[dict] = None) -> str:
    metrics = metrics or {}
    total_orders = metrics.get("totalOrders") or 0
    top_product = metrics.get("topProduct") or "Blue T-Shirt"
    top_product_share = metrics.get("topProductShare") or 0

    return " ".join(
        [
            f"Jumlah pesanan mingguan: {total_orders}.",
            f"{top_product} menyumbang {top_product_share}% daripada jualan.",
            "Cadangan: tambah stok warna paling laris dan jalankan promosi hujung minggu.",
        ]
    )
