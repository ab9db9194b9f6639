from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.dependencies import get_pipeline
from app.schemas.message import MessageResponse, WhatsAppMessageRequest
from app.services.commerce_types import InboundMessage
from app.services.pipeline_service import MessagePipeline

router = APIRouter(prefix="/api/messages", tags=["messages"])

MSG_MISSING_FIELDS = "Message and phoneNumber are required"


@router.post("/whatsapp", response_model=MessageResponse)
def process_whatsapp_message(request: WhatsAppMessageRequest, pipeline: MessagePipeline = Depends(get_pipeline)):
    """Handle one inbound WhatsApp message and return the bot reply."""
    if not (request.message or "").strip() or not (request.phone_number or "").strip():
        return JSONResponse(status_code=400, content={"success": False, "error": MSG_MISSING_FIELDS})

    inbound = InboundMessage(
        text=request.message,
        sender_id=request.phone_number,
        display_name=request.display_name,
        channel=request.channel,
        locale=request.locale,
    )

    # OrderPersistenceError propagates to the app-level handler
    result = pipeline.process_message(inbound)

    return MessageResponse(
        success=True,
        intent=result.intent.value,
        reply=result.reply,
        metadata=result.metadata,
    )
