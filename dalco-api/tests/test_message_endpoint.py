from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, Mock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import get_db
from app.dependencies import (
    get_intent_service,
    get_inventory_service,
    get_order_service,
    get_pipeline,
)
from app.main import app
from app.models import Lead
from app.services.errors import SheetsError
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture(autouse=True)
def _overrides(pipeline, offline_intents, sheets, mock_db):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_intent_service] = lambda: offline_intents
    app.dependency_overrides[get_inventory_service] = lambda: InventoryService(sheets)
    app.dependency_overrides[get_order_service] = lambda: OrderService(sheets)
    app.dependency_overrides[get_db] = lambda: mock_db
    yield
    app.dependency_overrides.clear()


class TestWhatsAppMessage:
    def test_inventory_question(self, client):
        response = client.post(
            "/api/messages/whatsapp",
            json={"message": "ada tak baju biru saiz M 3 unit", "phoneNumber": "+60123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["intent"] == "inventory"
        assert data["reply"].startswith("Yes, stok 3 unit untuk Blue T-Shirt tersedia.")
        assert data["metadata"]["availability"]["remainingStock"] == 5

    def test_missing_phone_number(self, client, db_session):
        response = client.post("/api/messages/whatsapp", json={"message": "hai"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Message and phoneNumber are required"}
        db_session.add.assert_not_called()

    def test_blank_message(self, client):
        response = client.post("/api/messages/whatsapp", json={"message": "   ", "phoneNumber": "+60123"})
        assert response.status_code == 400

    @patch("app.services.pipeline_service.alert_order_failure")
    def test_order_persistence_failure_is_500(self, mock_alert, client, sheets):
        sheets.append_values.side_effect = SheetsError("Google Sheets API error: 503", 503)

        response = client.post(
            "/api/messages/whatsapp",
            json={"message": "nak tempah 30 baju", "phoneNumber": "+60123"},
        )

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert "WhatsApp Customer" in data["error"]
        mock_alert.assert_called_once()

    def test_display_name_used_for_order(self, client, sheets):
        response = client.post(
            "/api/messages/whatsapp",
            json={"message": "order 12 pcs", "phoneNumber": "+60123", "displayName": "Aminah"},
        )

        assert response.status_code == 200
        assert response.json()["metadata"]["order"]["customerName"] == "Aminah"
        sheets.append_values.assert_called_once()


class TestLeads:
    def test_lists_recent_order_replies(self, client, mock_db):
        turn = SimpleNamespace(
            id=uuid4(),
            channel="whatsapp",
            direction="outbound",
            peer_address="+60123",
            content="Terima kasih!",
            locale="ms",
            intent="order",
            turn_metadata={"order": {"customerName": "Aminah"}},
            status="sent",
            created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        mock_db.query.return_value.filter.return_value.order_by.return_value.limit.return_value.all.return_value = [turn]

        response = client.get("/api/leads")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data[0]["to"] == "+60123"
        assert data[0]["intent"] == "order"
        assert data[0]["createdAt"] == "2025-01-01T00:00:00+00:00"

    def test_creates_lead(self, client, mock_db):
        response = client.post(
            "/api/leads",
            json={"name": "Aminah", "phoneNumber": "+60123", "interest": "hoodie", "budget": "RM500"},
        )

        assert response.status_code == 201
        lead = mock_db.add.call_args[0][0]
        assert isinstance(lead, Lead)
        assert response.json() == {"success": True, "id": str(lead.id)}
        assert lead.phone_number == "+60123"
        assert lead.source == "manual"
        assert lead.extra == {"budget": "RM500"}
        mock_db.commit.assert_called_once()


class TestAnalytics:
    def test_overview(self, client, sheets):
        sheets.get_values.return_value = [
            ["2025-01-01T00:00:00.000Z", "Aminah", "+60123", "Red Polo", "4", "KL"],
        ]

        response = client.get("/api/analytics/overview")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalOrders"] == 1
        assert data["topProduct"] == "Red Polo"

    def test_insights_from_supplied_metrics(self, client, sheets):
        response = client.post("/api/analytics/insights", json={"metrics": {"totalOrders": 42}})

        assert response.status_code == 200
        assert "Jumlah pesanan mingguan: 42." in response.json()["insights"]
        sheets.get_values.assert_not_called()

    def test_insights_without_body_use_live_metrics(self, client, sheets):
        sheets.get_values.side_effect = SheetsError("Google Sheets env vars missing")

        response = client.post("/api/analytics/insights")

        assert response.status_code == 200
        assert "Jumlah pesanan mingguan: 0." in response.json()["insights"]


class TestSystemStatus:
    def test_shallow_status(self, client):
        response = client.get("/api/system/status")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["deepChecks"] is None
        assert [entry["group"] for entry in data["config"]] == ["database", "jamai", "googleSheets"]

    @patch("app.routers.system.SessionLocal")
    def test_deep_status(self, mock_session_local, client):
        mock_session_local.return_value = Mock()

        response = client.get("/api/system/status", params={"deep": "true"})

        checks = response.json()["deepChecks"]
        assert checks["database"]["healthy"] is True
        assert checks["jamai"]["healthy"] is False
        assert checks["googleSheets"]["sampleInventoryCount"] == 3


class TestAppRoutes:
    def test_root(self, client):
        data = client.get("/").json()
        assert data["success"] is True
        assert data["version"] == "1.0.0"

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["services"]["database"] == "connected"

    def test_health_database_down(self, client, mock_db):
        mock_db.execute.side_effect = RuntimeError("connection refused")

        response = client.get("/api/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Route not found",
            "path": "/api/unknown",
            "method": "GET",
        }


@pytest.fixture
def malformed_sheets_key(session_factory):
    """Live wiring with a Sheets private key that cannot be parsed."""
    bad_settings = Settings(
        _env_file=None,
        google_service_account_email="bot@dalco.iam.gserviceaccount.com",
        google_private_key="not-a-key",
        google_sheets_spreadsheet_id="sheet-123",
    )
    app.dependency_overrides.pop(get_pipeline)
    with patch("app.dependencies.settings", bad_settings), patch("app.dependencies._sheets_client", None), patch(
        "app.dependencies._intent_service", None
    ), patch("app.dependencies.SessionLocal", session_factory):
        yield


class TestMalformedSheetsKey:
    def test_greeting_still_answered(self, client, malformed_sheets_key):
        response = client.post("/api/messages/whatsapp", json={"message": "hello", "phoneNumber": "+60123"})

        assert response.status_code == 200
        assert response.json()["intent"] == "general"

    def test_inventory_question_degrades_to_unavailable(self, client, malformed_sheets_key):
        response = client.post(
            "/api/messages/whatsapp",
            json={"message": "ada stok 3 unit t-shirt", "phoneNumber": "+60123"},
        )

        assert response.status_code == 200
        assert response.json()["metadata"]["availability"] == {"available": False}
