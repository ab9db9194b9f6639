from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WhatsAppMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # optional here so missing fields get the 400 below instead of a 422
    message: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    channel: str = "whatsapp"
    locale: str = "ms"


class MessageResponse(BaseModel):
    success: bool
    intent: str
    reply: str
    metadata: dict = {}
