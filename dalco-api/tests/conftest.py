from unittest.mock import MagicMock, Mock

import pytest

from app.config import RemoteIntentConfig
from app.services.conversation_service import ConversationLogger
from app.services.intent_service import IntentService
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService
from app.services.pipeline_service import MessagePipeline

CATALOG_ROWS = [
    ["SKU-001", "Blue T-Shirt", "Blue", "M", "5", "25.90"],
    ["SKU-002", "Blue T-Shirt", "Blue", "L", "0", "25.90"],
    ["SKU-003", "Red Polo", "Red", "S", "12", "39.00"],
]


@pytest.fixture
def db_session():
    """Mock database session."""
    return Mock()


@pytest.fixture
def session_factory(db_session):
    return Mock(return_value=db_session)


@pytest.fixture
def sheets():
    """Sheets client stub serving the sample catalog."""
    client = Mock()
    client.get_values.return_value = [list(row) for row in CATALOG_ROWS]
    client.append_values.return_value = {"updatedRange": "Orders!A5:G5"}
    return client


@pytest.fixture
def jamai_client():
    return MagicMock()


@pytest.fixture
def offline_intents(jamai_client):
    """Intent service with no remote tables configured."""
    return IntentService(RemoteIntentConfig(), jamai_client)


@pytest.fixture
def journal(session_factory):
    return ConversationLogger(session_factory)


@pytest.fixture
def pipeline(offline_intents, sheets, journal):
    return MessagePipeline(
        intents=offline_intents,
        inventory=InventoryService(sheets),
        orders=OrderService(sheets, clock=lambda: "2025-01-01T00:00:00.000Z"),
        journal=journal,
    )
