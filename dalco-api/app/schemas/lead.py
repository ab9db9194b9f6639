from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LeadCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    interest: Optional[str] = None
    notes: Optional[str] = None
    source: Optional[str] = None


class LeadCreated(BaseModel):
    success: bool
    id: str


class LeadList(BaseModel):
    success: bool
    data: list[dict]
