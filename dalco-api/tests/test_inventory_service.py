from unittest.mock import Mock

import pytest

from app.services.commerce_types import InventoryAttributes, InventoryQuery
from app.services.errors import SheetsError
from app.services.inventory_service import InventoryService, parse_catalog_row


def _query(item_name="t-shirt", quantity=1, color=None, size=None):
    return InventoryQuery(item_name=item_name, quantity=quantity, attributes=InventoryAttributes(color, size))


@pytest.fixture
def service(sheets):
    return InventoryService(sheets, "Inventory!A2:F")


class TestParseCatalogRow:
    def test_full_row(self):
        item = parse_catalog_row(["SKU-001", "Blue T-Shirt", "Blue", "M", "5", "25.90"])
        assert item.sku == "SKU-001"
        assert item.stock == 5
        assert item.price == 25.90

    def test_short_row_is_padded(self):
        item = parse_catalog_row(["SKU-009", "Cap"])
        assert item.color == ""
        assert item.size == ""
        assert item.stock == 0
        assert item.price == 0.0

    def test_non_numeric_stock_is_zero(self):
        assert parse_catalog_row(["SKU-1", "Cap", "Red", "S", "n/a", "abc"]).stock == 0

    def test_infinite_stock_is_zero(self):
        assert parse_catalog_row(["SKU-1", "Blue T-Shirt", "Blue", "M", "inf", "1"]).stock == 0
        assert parse_catalog_row(["SKU-1", "Blue T-Shirt", "Blue", "M", "Infinity", "1"]).stock == 0


class TestCheckAvailability:
    def test_match_with_enough_stock(self, service):
        result = service.check_availability(_query(quantity=3, color="blue", size="M"))

        assert result.available is True
        assert result.remaining_stock == 5
        assert result.item.sku == "SKU-001"

    def test_match_without_enough_stock(self, service):
        result = service.check_availability(_query(quantity=10, color="blue", size="M"))

        assert result.available is False
        assert result.remaining_stock == 5
        assert result.item.name == "Blue T-Shirt"

    def test_no_size_match(self, service):
        result = service.check_availability(_query(size="XL"))

        assert result.available is False
        assert result.item is None
        assert result.remaining_stock is None
        assert result.to_dict() == {"available": False}

    def test_first_match_in_catalog_order(self, service):
        result = service.check_availability(_query(item_name="T-SHIRT"))
        assert result.item.sku == "SKU-001"

    def test_size_compared_uppercase(self, service):
        result = service.check_availability(_query(size="l"))
        assert result.item.sku == "SKU-002"
        assert result.available is False
        assert result.remaining_stock == 0

    def test_color_is_substring_match(self, service, sheets):
        sheets.get_values.return_value = [["SKU-7", "Polo", "Navy Blue", "M", "4", "30"]]
        result = service.check_availability(_query(item_name="polo", color="blue"))
        assert result.available is True

    def test_reads_catalog_every_time(self, service, sheets):
        service.check_availability(_query())
        service.check_availability(_query())
        assert sheets.get_values.call_count == 2
        sheets.get_values.assert_called_with("Inventory!A2:F")

    def test_does_not_write(self, service, sheets):
        service.check_availability(_query(quantity=2))
        sheets.append_values.assert_not_called()

    def test_read_failure_propagates(self):
        sheets = Mock()
        sheets.get_values.side_effect = SheetsError("Google Sheets API error: 500", 500)
        with pytest.raises(SheetsError):
            InventoryService(sheets).check_availability(_query())
