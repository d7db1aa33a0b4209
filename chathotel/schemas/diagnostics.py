from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from chathotel.models import TurnDirection


class GuestSessionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    phone: str
    name: str
    first_contact: datetime
    last_contact: datetime
    message_count: int
    interests: list[str]
    booking_intent: bool
    is_returning: bool


class TurnSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    text: str
    direction: TurnDirection
    timestamp: datetime


class GuestDetailResponse(BaseModel):
    session: GuestSessionSchema
    history: list[TurnSchema]
    context: str


class StatusResponse(BaseModel):
    service: str
    status: str = "operational"
    timestamp: datetime
    uptime_seconds: float
    active_sessions: int
    total_messages: int
    whatsapp_configured: bool
    llm_configured: bool
    business_account_configured: bool


class ManualMessageRequest(BaseModel):
    to: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ManualMessageResponse(BaseModel):
    success: bool
    message_id: Optional[str] = None
    to: str
    error: Optional[str] = None
