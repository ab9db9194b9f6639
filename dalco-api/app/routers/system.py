from fastapi import APIRouter, Depends

from app.config import settings
from app.database import SessionLocal
from app.dependencies import get_intent_service, get_inventory_service, get_order_service
from app.services.intent_service import IntentService
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService
from app.services.system_service import get_system_status

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/status")
async def system_status(
    deep: bool = False,
    intents: IntentService = Depends(get_intent_service),
    inventory: InventoryService = Depends(get_inventory_service),
    orders: OrderService = Depends(get_order_service),
):
    status = await get_system_status(
        settings,
        deep=deep,
        session_factory=SessionLocal,
        intents=intents,
        inventory=inventory,
        orders=orders,
    )
    return {"success": True, **status}
